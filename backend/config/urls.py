from django.contrib import admin
from django.urls import path, include, re_path

from user.views import MeView

urlpatterns = [
    path('admin/', admin.site.urls),
    re_path(r'^api/auth/me/?$', MeView.as_view(), name='auth-me'),
    path('api/', include('trips.urls')),
    path('api/user/', include('user.urls')),
    path('api/search', include('search.urls')),
]
