"""
URL configuration for the search module.
"""
from django.urls import re_path
from search.views import SearchView

app_name = 'search'

urlpatterns = [
    # Matches both /api/search and /api/search/
    re_path(r'^/?$', SearchView.as_view(), name='search'),
]
