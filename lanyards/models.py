# lanyards/models.py
"""
Operational tables of the lanyard collection platform.

Organisers register events, volunteers check in on site via GPS and grade
the lanyards they collect. The monthly Green ICT audit only reads these
tables to derive its activity counters.
"""

from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from django.utils import timezone


class Event(models.Model):
    """ A collection event registered by an organiser. """
    title = models.CharField(max_length=200)
    organizer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='organized_events'
    )
    location_name = models.CharField(max_length=255, blank=True)
    latitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    longitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    starts_at = models.DateTimeField(null=True, blank=True)
    expected_lanyards = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.title} ({self.created_at:%Y-%m-%d})"


class CheckIn(models.Model):
    """ A volunteer's GPS check-in at an event. """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='check_ins'
    )
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name='check_ins')
    latitude = models.DecimalField(max_digits=9, decimal_places=6)
    longitude = models.DecimalField(max_digits=9, decimal_places=6)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"Check-in {self.user_id} @ event {self.event_id}"


class LanyardGrade(models.Model):
    """ A batch of collected lanyards graded by a volunteer. """
    GRADE_CHOICES = [
        ('A', 'Reusable as-is'),
        ('B', 'Reusable after cleaning'),
        ('C', 'Recycling only'),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='lanyard_grades'
    )
    event = models.ForeignKey(
        Event,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='lanyard_grades'
    )
    grade = models.CharField(max_length=1, choices=GRADE_CHOICES)
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1), MaxValueValidator(100000)])
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.quantity} x grade {self.grade} by {self.user_id}"

