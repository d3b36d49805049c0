"""
Views for the search module.
"""
import logging

from django.conf import settings
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from search.dtos import SortMode
from search.search_service import TripSearchService
from search.serializers import SearchPageSerializer

logger = logging.getLogger(__name__)


class SearchView(APIView):
    """
    API endpoint for searching trips.

    GET /api/search/?q=coastal&sortBy=likes&page=1&limit=20

    - q: free-text query (default empty: every trip is returned)
    - sortBy: likes | views | date (default TRIP_SEARCH["DEFAULT_SORT"], normally
      date; relevance when q is given). Unknown values fall back to the default.
    - page, limit: malformed or < 1 values fall back to 1 and 20
    """

    def get(self, request):
        """Search trips"""
        query = request.query_params.get('q', '')
        default_sort = SortMode.from_param(getattr(settings, 'TRIP_SEARCH', {}).get('DEFAULT_SORT'))
        sort_mode = SortMode.from_param(request.query_params.get('sortBy'), default_sort)

        try:
            result = TripSearchService().search(
                query,
                sort_mode,
                page=request.query_params.get('page'),
                limit=request.query_params.get('limit'),
            )
        except Exception:
            logger.exception("Error searching trips")
            return Response(
                {'message': 'Internal server error'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        serializer = SearchPageSerializer(result)
        return Response(serializer.data, status=status.HTTP_200_OK)
