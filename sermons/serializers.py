def block_to_dict(block):
    return {
        'id': block.id,
        'sermonId': block.sermon_id,
        'type': block.type,
        'content': block.content,
        'order': block.order,
        'positionX': block.position_x,
        'positionY': block.position_y,
        'preached': block.preached,
        'metadata': block.metadata or {},
    }


def history_to_dict(entry):
    return {
        'id': entry.pk,
        'sermonId': entry.sermon_id,
        'date': entry.date.isoformat(),
        'location': entry.location,
        'notes': entry.notes,
        'createdAt': entry.created_at.isoformat(),
    }


def sermon_to_dict(sermon, with_blocks=False, with_history=False):
    data = {
        'id': sermon.id,
        'title': sermon.title,
        'category': sermon.category,
        'status': sermon.status,
        'authorId': sermon.author_id,
        'bibleSources': sermon.bible_sources or [],
        'version': sermon.version,
        'createdAt': sermon.created_at.isoformat(),
        'updatedAt': sermon.updated_at.isoformat(),
    }
    if with_blocks:
        data['blocks'] = [block_to_dict(b) for b in sermon.blocks.all()]
    if with_history:
        data['history'] = [history_to_dict(h) for h in sermon.history.all()]
    return data
