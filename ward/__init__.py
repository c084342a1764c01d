"""Ward administration app.

Models, domain services, serializers, views and route registrations
for personnel, leave, schedules, patient-card lending, research topics,
users, permissions and system settings.
"""
