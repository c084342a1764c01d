"""
Django admin registrations for the ward models.

Superusers can inspect and correct personnel, lending and schedule
data through ``/admin/``.  Only list displays, filters and searches are
configured; the child history lists are edited inline on the employee.
"""
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import (
    Absence,
    AuditEvent,
    Card,
    CardRecord,
    DutySchedule,
    Employee,
    FamilyMember,
    LeaveRecord,
    ModulePermission,
    ResearchTopic,
    Salary,
    Schedule,
    SystemSetting,
    Training,
    User,
    WorkHistory,
)


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ('username', 'full_name', 'role', 'employee', 'is_active')
    list_filter = ('role', 'is_active')
    search_fields = ('username', 'full_name')
    fieldsets = BaseUserAdmin.fieldsets + (
        ('Ward', {'fields': ('full_name', 'role', 'employee')}),
    )


class FamilyInline(admin.TabularInline):
    model = FamilyMember
    extra = 0


class WorkHistoryInline(admin.TabularInline):
    model = WorkHistory
    extra = 0


class TrainingInline(admin.TabularInline):
    model = Training
    extra = 0


class SalaryInline(admin.TabularInline):
    model = Salary
    extra = 0


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ('id', 'ho_va_ten', 'cap_bac', 'chuc_vu', 'doi_tuong', 'trang_thai')
    list_filter = ('doi_tuong', 'trang_thai')
    search_fields = ('ho_va_ten', 'cccd', 'cmqd', 'so_the_dang', 'dien_thoai')
    inlines = [FamilyInline, WorkHistoryInline, TrainingInline, SalaryInline]


@admin.register(LeaveRecord)
class LeaveRecordAdmin(admin.ModelAdmin):
    list_display = ('id', 'ho_va_ten', 'loai_nghi', 'tu_ngay', 'den_ngay')
    list_filter = ('loai_nghi',)
    search_fields = ('ho_va_ten',)


@admin.register(Absence)
class AbsenceAdmin(admin.ModelAdmin):
    list_display = ('id', 'ho_va_ten', 'loai_nghi', 'ngay_nghi')
    list_filter = ('loai_nghi', 'ngay_nghi')
    search_fields = ('ho_va_ten',)


@admin.register(DutySchedule)
class DutyScheduleAdmin(admin.ModelAdmin):
    list_display = ('id', 'ngay_truc', 'bac_sy', 'dieu_duong')
    date_hierarchy = 'ngay_truc'
    search_fields = ('bac_sy', 'dieu_duong', 'phu_dieu_duong')


@admin.register(Schedule)
class ScheduleAdmin(admin.ModelAdmin):
    list_display = ('id', 'noi_dung', 'ngay_bat_dau', 'ngay_ket_thuc', 'trang_thai')
    list_filter = ('trang_thai',)
    search_fields = ('noi_dung', 'chi_tiet')


@admin.register(Card)
class CardAdmin(admin.ModelAdmin):
    list_display = ('so_the', 'trang_thai', 'created_at')
    list_filter = ('trang_thai',)
    search_fields = ('so_the',)


@admin.register(CardRecord)
class CardRecordAdmin(admin.ModelAdmin):
    list_display = ('id', 'so_the', 'ho_ten_benh_nhan', 'ngay_muon', 'trang_thai',
                    'trang_thai_tien_muon', 'trang_thai_tien_tra')
    list_filter = ('trang_thai', 'trang_thai_tien_muon', 'trang_thai_tien_tra')
    search_fields = ('so_the', 'ho_ten_benh_nhan', 'ho_ten_nguoi_cham')


@admin.register(ResearchTopic)
class ResearchTopicAdmin(admin.ModelAdmin):
    list_display = ('id', 'ten_de_tai', 'dsnv', 'cap_quan_ly', 'trang_thai')
    list_filter = ('trang_thai', 'cap_quan_ly')
    search_fields = ('ten_de_tai',)


@admin.register(ModulePermission)
class ModulePermissionAdmin(admin.ModelAdmin):
    list_display = ('module', 'role', 'can_view', 'can_add', 'can_edit', 'can_delete')
    list_filter = ('role',)


@admin.register(SystemSetting)
class SystemSettingAdmin(admin.ModelAdmin):
    list_display = ('key', 'updated_at')


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('id', 'action', 'user', 'object_type', 'object_id', 'created_at')
    list_filter = ('action', 'object_type')
    search_fields = ('object_id',)
    readonly_fields = ('user', 'action', 'object_type', 'object_id', 'detail', 'created_at')
