def insight_to_dict(insight):
    return {
        'id': insight.id,
        'userId': insight.user_id,
        'reference': insight.reference,
        'content': insight.content,
        'color': insight.color,
        'createdAt': insight.created_at.isoformat(),
        'updatedAt': insight.updated_at.isoformat(),
    }
