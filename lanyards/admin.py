from django.contrib import admin
from .models import Event, CheckIn, LanyardGrade

@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ('title', 'organizer', 'location_name', 'starts_at', 'created_at')
    search_fields = ('title', 'location_name', 'organizer__email')
    date_hierarchy = 'created_at'

@admin.register(CheckIn)
class CheckInAdmin(admin.ModelAdmin):
    list_display = ('user', 'event', 'latitude', 'longitude', 'created_at')
    list_filter = ('event',)
    date_hierarchy = 'created_at'

@admin.register(LanyardGrade)
class LanyardGradeAdmin(admin.ModelAdmin):
    list_display = ('user', 'event', 'grade', 'quantity', 'created_at')
    list_filter = ('grade',)
    date_hierarchy = 'created_at'
