"""URL configuration of the files manager API."""

from django.urls import path

from server.apps.api import views

app_name = 'api'

urlpatterns = [
    # Service state
    path('status', views.status, name='status'),
    path('stats', views.stats, name='stats'),

    # Users and sessions
    path('users', views.users, name='users'),
    path('users/me', views.users_me, name='users-me'),
    path('connect', views.connect, name='connect'),
    path('disconnect', views.disconnect, name='disconnect'),

    # File nodes
    path('files', views.files, name='files'),
    path('files/<str:file_id>', views.file_detail, name='file-detail'),
    path('files/<str:file_id>/publish', views.file_publish, name='file-publish'),
    path(
        'files/<str:file_id>/unpublish',
        views.file_unpublish,
        name='file-unpublish',
    ),
    path('files/<str:file_id>/data', views.file_data, name='file-data'),
]
