"""
URL mappings for the ward administration API.

Trailing slashes are omitted, matching the front-end's endpoint table.
"""
from django.urls import path, include

from .views import auth, cards, duty, leave, overview, permissions, personnel, research, schedules, settings, users
from .views.health import healthz

api_patterns = [
    # auth
    path('auth/login', auth.login_view, name='login'),
    path('auth/me', auth.me_view, name='me'),
    path('auth/refresh', auth.jwt_refresh_view, name='jwt-refresh'),
    path('auth/logout', auth.logout_view, name='logout'),
    path('auth/change-password', auth.change_password_view, name='change-password'),

    # personnel
    path('personnel', personnel.employees, name='personnel'),
    path('personnel/<int:employee_id>', personnel.employee_detail, name='personnel-detail'),
    path('personnel/bulk', personnel.bulk_create, name='personnel-bulk'),
    path('personnel/bulk-update', personnel.bulk_update, name='personnel-bulk-update'),
    path('personnel/import', personnel.import_xlsx, name='personnel-import'),
    path('personnel/template', personnel.import_template, name='personnel-template'),
    path('personnel/party-card-image', personnel.party_card_image, name='personnel-party-card'),
    path('personnel/work-history', personnel.work_history, name='personnel-work-history'),
    path('personnel/training', personnel.training, name='personnel-training'),

    # leave
    path('leave', leave.leaves, name='leave'),
    path('leave/today', leave.leaves_today, name='leave-today'),
    path('leave/<int:leave_id>', leave.leave_detail, name='leave-detail'),

    # absence roster
    path('absence', duty.absences, name='absence'),
    path('absence/copy', duty.absence_copy, name='absence-copy'),
    path('absence/generate', duty.absence_generate, name='absence-generate'),
    path('absence/<int:absence_id>', duty.absence_detail, name='absence-detail'),

    # duty roster
    path('duty', duty.duties, name='duty'),
    path('duty/import', duty.duty_import, name='duty-import'),
    path('duty/export', duty.duty_export, name='duty-export'),
    path('duty/template', duty.duty_template, name='duty-template'),
    path('duty/<int:duty_id>', duty.duty_detail, name='duty-detail'),

    # schedules
    path('schedules', schedules.schedules, name='schedules'),
    path('schedules/calendar', schedules.schedule_calendar, name='schedules-calendar'),
    path('schedules/attachment', schedules.schedule_attachment, name='schedules-attachment'),
    path('schedules/<int:schedule_id>', schedules.schedule_detail, name='schedules-detail'),

    # card catalog
    path('cards', cards.cards, name='cards'),
    path('cards/status', cards.card_status_batch, name='cards-status'),
    path('cards/import', cards.card_import, name='cards-import'),
    path('cards/template', cards.card_template, name='cards-template'),
    path('cards/<int:card_id>', cards.card_detail, name='cards-detail'),

    # card lending
    path('card-records', cards.records, name='card-records'),
    path('card-records/active', cards.active_records, name='card-records-active'),
    path('card-records/check', cards.check_borrowing, name='card-records-check'),
    path('card-records/handover', cards.handover_batch, name='card-records-handover'),
    path('card-records/export', cards.export_records, name='card-records-export'),
    path('card-records/import', cards.import_records, name='card-records-import'),
    path('card-records/<int:record_id>', cards.record_detail, name='card-records-detail'),
    path('card-records/<int:record_id>/return', cards.return_record, name='card-records-return'),

    # research
    path('research', research.topics, name='research'),
    path('research/evidence', research.evidence_upload, name='research-evidence-upload'),
    path('research/<int:topic_id>', research.topic_detail, name='research-detail'),
    path('research/<int:topic_id>/clone', research.topic_clone, name='research-clone'),
    path('research/<int:topic_id>/evidence', research.topic_evidence, name='research-evidence'),

    # users & access
    path('users', users.users, name='users'),
    path('users/<int:user_id>', users.user_detail, name='users-detail'),
    path('permissions', permissions.permissions_list, name='permissions'),
    path('permissions/me', permissions.my_permissions, name='permissions-me'),
    path('permissions/<int:perm_id>', permissions.permission_detail, name='permissions-detail'),

    # settings
    path('settings/background', settings.background, name='settings-background'),
    path('settings/background/upload', settings.background_upload, name='settings-background-upload'),
    path('settings/menu-order', settings.menu_order, name='settings-menu-order'),

    path('overview', overview.overview_view, name='overview'),
]

urlpatterns = [
    path('api/', include(api_patterns)),
    path('healthz', healthz),
    path('', include('django_prometheus.urls')),
]
