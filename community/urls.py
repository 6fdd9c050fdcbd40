from django.urls import path

from . import views

app_name = 'community'

# Rotas fixas (my, join, posts, events) antes de <str:pk>
urlpatterns = [
    path('community', views.CommunityCreateView.as_view(), name='create'),
    path('community/my/<str:user_id>', views.MyCommunitiesView.as_view(), name='my'),
    path('community/join/<str:invite_code>', views.JoinView.as_view(), name='join'),

    path('community/posts/<str:post_id>', views.PostDetailView.as_view(), name='post-detail'),
    path('community/posts/<str:post_id>/acknowledge', views.AcknowledgeView.as_view(), name='post-acknowledge'),
    path('community/events/<str:event_id>', views.EventDetailView.as_view(), name='event-detail'),

    path('community/<str:pk>', views.CommunityDetailView.as_view(), name='detail'),
    path('community/<str:pk>/members', views.MembersView.as_view(), name='members'),
    path('community/<str:pk>/members/<str:target_user_id>', views.MemberDetailView.as_view(), name='member-detail'),
    path('community/<str:pk>/post', views.PostCreateView.as_view(), name='post-create'),
    path('community/<str:pk>/feed', views.FeedView.as_view(), name='feed'),
    path('community/<str:pk>/share-sermon', views.ShareSermonView.as_view(), name='share-sermon'),
    path('community/<str:pk>/shared-sermons', views.SharedSermonsView.as_view(), name='shared-sermons'),
    path('community/<str:pk>/event', views.EventCreateView.as_view(), name='event-create'),
    path('community/<str:pk>/events', views.UpcomingEventsView.as_view(), name='events'),
]
