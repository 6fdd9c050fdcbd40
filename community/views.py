from core.views import ApiView
from . import services
from .serializers import community_to_dict, member_to_dict, post_to_dict, event_to_dict


# ==============================================================================
# 1. COMUNIDADES E MEMBROS
# ==============================================================================

class CommunityCreateView(ApiView):
    status_sucesso = 201

    def post(self, request):
        owner_id = self.data.get('ownerId') or self.data.get('userId')
        name, = self.exigir('name')
        comunidade = services.create_community(owner_id, name, self.data.get('description'))
        return community_to_dict(comunidade)


class MyCommunitiesView(ApiView):
    """Comunidades das quais o usuário participa, com total de membros e dono."""

    def get(self, request, user_id):
        return [community_to_dict(c) for c in services.my_communities(user_id)]


class JoinView(ApiView):

    def post(self, request, invite_code):
        user_id, = self.exigir('userId')
        return member_to_dict(services.join_by_invite(user_id, invite_code))


class CommunityDetailView(ApiView):

    def patch(self, request, pk):
        user_id, = self.exigir('userId')
        return community_to_dict(services.update_community(user_id, pk, self.data))


class MembersView(ApiView):

    def get(self, request, pk):
        return [member_to_dict(m) for m in services.members(pk)]


class MemberDetailView(ApiView):

    def delete(self, request, pk, target_user_id):
        services.remove_member(self.user_id_da_query(), pk, target_user_id)
        return {'communityId': pk, 'userId': target_user_id, 'removed': True}


# ==============================================================================
# 2. MURAL
# ==============================================================================

class PostCreateView(ApiView):
    status_sucesso = 201

    def post(self, request, pk):
        user_id, = self.exigir('userId')
        return post_to_dict(services.create_post(user_id, pk, self.data))


class FeedView(ApiView):

    def get(self, request, pk):
        return [post_to_dict(p) for p in services.feed(pk)]


class PostDetailView(ApiView):

    def patch(self, request, post_id):
        user_id, = self.exigir('userId')
        return post_to_dict(services.update_post(user_id, post_id, self.data))

    def delete(self, request, post_id):
        services.delete_post(self.user_id_da_query(), post_id)
        return {'id': post_id, 'deleted': True}


class AcknowledgeView(ApiView):

    def post(self, request, post_id):
        user_id, = self.exigir('userId')
        return post_to_dict(services.acknowledge_post(user_id, post_id))


class ShareSermonView(ApiView):
    status_sucesso = 201

    def post(self, request, pk):
        user_id, sermon_id = self.exigir('userId', 'sermonId')
        return post_to_dict(services.share_sermon(user_id, pk, sermon_id))


class SharedSermonsView(ApiView):

    def get(self, request, pk):
        return [post_to_dict(p) for p in services.shared_sermons(pk)]


# ==============================================================================
# 3. AGENDA
# ==============================================================================

class EventCreateView(ApiView):
    status_sucesso = 201

    def post(self, request, pk):
        user_id, = self.exigir('userId')
        return event_to_dict(services.create_event(user_id, pk, self.data))


class UpcomingEventsView(ApiView):

    def get(self, request, pk):
        return [event_to_dict(e) for e in services.upcoming_events(pk)]


class EventDetailView(ApiView):

    def patch(self, request, event_id):
        user_id, = self.exigir('userId')
        return event_to_dict(services.update_event(user_id, event_id, self.data))

    def delete(self, request, event_id):
        services.delete_event(self.user_id_da_query(), event_id)
        return {'id': event_id, 'deleted': True}
