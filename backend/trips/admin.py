from django.contrib import admin
from .models import Trip, Pin


@admin.register(Trip)
class TripAdmin(admin.ModelAdmin):
    """
    Admin interface for Trip model.
    """
    list_display = ['title', 'user', 'is_public', 'start_date', 'end_date', 'view_count', 'like_count', 'created_at']
    list_filter = ['is_public', 'created_at', 'start_date']
    search_fields = ['title', 'summary', 'user__user__username']
    readonly_fields = ['id', 'created_at', 'view_count', 'like_count']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Basic Information', {
            'fields': ('id', 'user', 'title', 'summary', 'categories', 'created_at')
        }),
        ('Trip Details', {
            'fields': ('start_date', 'end_date', 'cover_image', 'is_public')
        }),
        ('Counters', {
            'fields': ('view_count', 'like_count')
        }),
    )

    def get_queryset(self, request):
        """Optimize queryset with select_related"""
        queryset = super().get_queryset(request)
        return queryset.select_related('user__user')


@admin.register(Pin)
class PinAdmin(admin.ModelAdmin):
    """
    Admin interface for Pin model.
    """
    list_display = ['title', 'trip', 'order', 'date', 'geohash']
    list_filter = ['trip']
    search_fields = ['title', 'description', 'trip__title']
    readonly_fields = ['id', 'geohash']
    ordering = ['trip', 'order']

    fieldsets = (
        ('References', {
            'fields': ('trip', 'title', 'description')
        }),
        ('Location', {
            'fields': ('latitude', 'longitude', 'geohash', 'date', 'order')
        }),
        ('Content', {
            'fields': ('activities', 'photos')
        }),
    )

    def get_queryset(self, request):
        """Optimize queryset with select_related"""
        queryset = super().get_queryset(request)
        return queryset.select_related('trip')
