"""
Serializers for the search module.
"""
from rest_framework import serializers
from trips.serializers import TripSerializer


class PaginationInfoSerializer(serializers.Serializer):
    """Serializer for PaginationInfo"""
    totalItems = serializers.IntegerField(source='total_items')
    totalPages = serializers.IntegerField(source='total_pages')
    currentPage = serializers.IntegerField(source='current_page')
    limit = serializers.IntegerField()
    hasNextPage = serializers.BooleanField(source='has_next_page')
    hasPrevPage = serializers.BooleanField(source='has_prev_page')


class SearchPageSerializer(serializers.Serializer):
    """Serializer for SearchPage"""
    trips = TripSerializer(many=True)
    pagination = PaginationInfoSerializer()
