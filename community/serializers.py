from users.services import resumo_usuario


def community_to_dict(community):
    data = {
        'id': community.id,
        'name': community.name,
        'description': community.description,
        'inviteCode': community.invite_code,
        'meetLink': community.meet_link or None,
        'ownerId': community.owner_id,
        'owner': resumo_usuario(community.owner),
        'createdAt': community.created_at.isoformat(),
    }
    # Presente quando a queryset foi anotada (my_communities)
    if hasattr(community, 'member_count'):
        data['memberCount'] = community.member_count
    return data


def member_to_dict(member):
    return {
        'id': member.pk,
        'userId': member.user_id,
        'communityId': member.community_id,
        'role': member.role,
        'user': resumo_usuario(member.user),
        'joinedAt': member.joined_at.isoformat(),
    }


def event_to_dict(event):
    return {
        'id': event.id,
        'communityId': event.community_id,
        'title': event.title,
        'description': event.description,
        'date': event.date.isoformat(),
        'meetLink': event.meet_link or None,
        'type': event.type,
        'participants': event.participants or [],
        'createdAt': event.created_at.isoformat(),
    }


def post_to_dict(post):
    return {
        'id': post.id,
        'communityId': post.community_id,
        'authorId': post.author_id,
        'author': resumo_usuario(post.author),
        'content': post.content,
        'type': post.type,
        'sermonId': post.sermon_id,
        'sermon': {'id': post.sermon.id, 'title': post.sermon.title} if post.sermon_id else None,
        'eventId': post.event_id,
        'event': event_to_dict(post.event) if post.event_id else None,
        'acknowledgedBy': post.acknowledged_by or [],
        'createdAt': post.created_at.isoformat(),
        'updatedAt': post.updated_at.isoformat(),
    }
