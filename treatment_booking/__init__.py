"""
Treatment Booking System

A FastAPI service for patient accounts and three-session treatment cycle
booking, with rescheduling, cancellation and email notifications.
"""

__version__ = "1.0.0"
