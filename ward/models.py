"""
Database models for the ward administration backend.

These models capture personnel records and their history lists, leave,
work schedules, the patient-card catalog and its lending records,
research topics, per-role module permissions and key/value system
settings.  Table and column names keep the Vietnamese names used by the
front-end so that JSON payloads map onto fields one to one.
"""
from __future__ import annotations

from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """System login identity with a coarse role.

    ``user`` sees what the permission table grants, ``manager`` likewise,
    and ``admin`` bypasses the permission table entirely.
    """
    ROLE_USER = 'user'
    ROLE_MANAGER = 'manager'
    ROLE_ADMIN = 'admin'
    ROLE_CHOICES = [
        (ROLE_USER, 'User'),
        (ROLE_MANAGER, 'Manager'),
        (ROLE_ADMIN, 'Administrator'),
    ]
    full_name = models.CharField(max_length=255, blank=True)
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=ROLE_USER, db_index=True)
    employee = models.ForeignKey(
        'Employee', null=True, blank=True, on_delete=models.SET_NULL, related_name='accounts'
    )
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'users'

    @property
    def display_name(self) -> str:
        return self.full_name or self.get_full_name() or self.username

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"


# ---------------------------------------------------------------------------
# Personnel
# ---------------------------------------------------------------------------

class Employee(models.Model):
    """A staff member of the ward (``dsnv``)."""
    ho_va_ten = models.CharField(max_length=255)
    ngay_sinh = models.DateField(null=True, blank=True)
    gioi_tinh = models.CharField(max_length=20, null=True, blank=True)
    cap_bac = models.CharField(max_length=100, null=True, blank=True)
    chuc_vu = models.CharField(max_length=255, null=True, blank=True)
    cccd = models.CharField(max_length=50, null=True, blank=True)
    ngay_cap_cccd = models.DateField(null=True, blank=True)
    cmqd = models.CharField(max_length=50, null=True, blank=True)
    ngay_cap_cmqd = models.DateField(null=True, blank=True)
    que_quan = models.CharField(max_length=255, null=True, blank=True)
    noi_o_hien_nay = models.CharField(max_length=255, null=True, blank=True)
    dien_thoai = models.CharField(max_length=50, null=True, blank=True)
    thang_nam_tuyen_dung = models.DateField(null=True, blank=True)
    thang_nam_nhap_ngu = models.DateField(null=True, blank=True)
    ngay_ve_khoa_cong_tac = models.DateField(null=True, blank=True)
    # status string used by list filters and bulk status updates
    trang_thai = models.CharField(max_length=100, null=True, blank=True, db_index=True)
    thang_nam_roi_khoa = models.DateField(null=True, blank=True)
    trang_thai_roi_khoa = models.CharField(max_length=100, null=True, blank=True)
    noi_den = models.CharField(max_length=255, null=True, blank=True)
    avatar = models.CharField(max_length=512, null=True, blank=True)
    ghi_chu = models.TextField(null=True, blank=True)
    dien_quan_ly = models.CharField(max_length=100, null=True, blank=True)
    ngay_vao_dang = models.DateField(null=True, blank=True)
    ngay_chinh_thuc = models.DateField(null=True, blank=True)
    so_the_dang = models.CharField(max_length=50, null=True, blank=True)
    ngay_cap_the_dang = models.DateField(null=True, blank=True)
    noi_cap_the_dang = models.CharField(max_length=255, null=True, blank=True)
    anh_the_dang = models.CharField(max_length=512, null=True, blank=True)
    # category tag (Sĩ quan, QNCN, CNVQP, ...)
    doi_tuong = models.CharField(max_length=100, null=True, blank=True, db_index=True)
    danh_hieu = models.CharField(max_length=255, null=True, blank=True)
    chung_chi_hanh_nghe = models.CharField(max_length=255, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'dsnv'
        ordering = ['ho_va_ten']

    def __str__(self) -> str:
        return self.ho_va_ten


class FamilyMember(models.Model):
    dsnv = models.ForeignKey(Employee, on_delete=models.CASCADE, related_name='family')
    moi_quan_he = models.CharField(max_length=100)
    ho_va_ten = models.CharField(max_length=255)
    nam_sinh = models.IntegerField(null=True, blank=True)
    nghe_nghiep = models.CharField(max_length=255, null=True, blank=True)
    so_dien_thoai = models.CharField(max_length=50, null=True, blank=True)
    ghi_chu = models.TextField(null=True, blank=True)

    class Meta:
        db_table = 'gia_dinh'

    def __str__(self) -> str:
        return f"{self.moi_quan_he}: {self.ho_va_ten}"


class WorkHistory(models.Model):
    dsnv = models.ForeignKey(Employee, on_delete=models.CASCADE, related_name='work_history')
    tu_thang_nam = models.CharField(max_length=20, null=True, blank=True)
    den_thang_nam = models.CharField(max_length=20, null=True, blank=True)
    don_vi_cong_tac = models.CharField(max_length=255, null=True, blank=True)
    cap_bac = models.CharField(max_length=100, null=True, blank=True)
    chuc_vu = models.CharField(max_length=255, null=True, blank=True)
    ghi_chu = models.TextField(null=True, blank=True)

    class Meta:
        db_table = 'qua_trinh_cong_tac'


class Training(models.Model):
    dsnv = models.ForeignKey(Employee, on_delete=models.CASCADE, related_name='training')
    tu_thang_nam = models.CharField(max_length=20, null=True, blank=True)
    den_thang_nam = models.CharField(max_length=20, null=True, blank=True)
    ten_co_so_dao_tao = models.CharField(max_length=255, null=True, blank=True)
    nganh_dao_tao = models.CharField(max_length=255, null=True, blank=True)
    trinh_do_dao_tao = models.CharField(max_length=100, null=True, blank=True)
    hinh_thuc_dao_tao = models.CharField(max_length=100, null=True, blank=True)
    van_bang_chung_chi = models.CharField(max_length=255, null=True, blank=True)
    xep_loai_tot_nghiep = models.CharField(max_length=100, null=True, blank=True)
    ghi_chu = models.TextField(null=True, blank=True)

    class Meta:
        db_table = 'qua_trinh_dao_tao'


class Salary(models.Model):
    dsnv = models.ForeignKey(Employee, on_delete=models.CASCADE, related_name='salary')
    thang_nam_nhan = models.CharField(max_length=20, null=True, blank=True)
    loai_nhom = models.CharField(max_length=100, null=True, blank=True)
    bac = models.CharField(max_length=50, null=True, blank=True)
    he_so = models.FloatField(null=True, blank=True)
    phan_tram_tnvk = models.FloatField(null=True, blank=True)
    hsbl = models.FloatField(null=True, blank=True)
    quan_ham = models.CharField(max_length=100, null=True, blank=True)
    hinh_thuc = models.CharField(max_length=100, null=True, blank=True)
    file_qd = models.CharField(max_length=512, null=True, blank=True)
    ghi_chu = models.TextField(null=True, blank=True)

    class Meta:
        db_table = 'len_luong'


# ---------------------------------------------------------------------------
# Leave
# ---------------------------------------------------------------------------

class LeaveRecord(models.Model):
    """A leave registration.  Name/rank/position are snapshots taken at
    creation so the record survives later edits to the employee."""
    dsnv = models.ForeignKey(Employee, null=True, blank=True, on_delete=models.SET_NULL, related_name='leaves')
    ho_va_ten = models.CharField(max_length=255, null=True, blank=True)
    cap_bac = models.CharField(max_length=100, null=True, blank=True)
    chuc_vu = models.CharField(max_length=255, null=True, blank=True)
    loai_nghi = models.CharField(max_length=100, null=True, blank=True)
    tu_ngay = models.DateField(null=True, blank=True, db_index=True)
    den_ngay = models.DateField(null=True, blank=True, db_index=True)
    ly_do_nghi = models.TextField(null=True, blank=True)
    noi_dang_ky_nghi = models.CharField(max_length=255, null=True, blank=True)
    ghi_chu = models.TextField(null=True, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL, related_name='leaves_created'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'quan_ly_phep'


class DutySchedule(models.Model):
    """One day of the ward's on-call roster.  Each role column holds the
    names on duty, separated by commas or newlines."""
    ngay_truc = models.DateField(db_index=True)
    bac_sy = models.TextField(null=True, blank=True)
    noi_tru = models.TextField(null=True, blank=True)
    sau_dai_hoc = models.TextField(null=True, blank=True)
    dieu_duong = models.TextField(null=True, blank=True)
    phu_dieu_duong = models.TextField(null=True, blank=True)
    ghi_chu = models.TextField(null=True, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL, related_name='duty_created'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'lich_truc'
        ordering = ['ngay_truc', 'id']


class Absence(models.Model):
    """Daily absence roster entry (off after a night shift, sick, ...)."""
    TYPE_POST_DUTY = 'Nghỉ trực'

    dsnv = models.ForeignKey(Employee, null=True, blank=True, on_delete=models.SET_NULL, related_name='absences')
    ho_va_ten = models.CharField(max_length=255)
    loai_nghi = models.CharField(max_length=100, default=TYPE_POST_DUTY)
    ngay_nghi = models.DateField(db_index=True)
    ghi_chu = models.TextField(null=True, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL, related_name='absences_created'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'quan_so_nghi'


# ---------------------------------------------------------------------------
# Work schedule
# ---------------------------------------------------------------------------

class Schedule(models.Model):
    STATUS_IN_PROGRESS = 'Đang thực hiện'
    STATUS_DONE = 'Hoàn thành'
    # derived only, never persisted
    STATUS_OVERDUE = 'Quá hạn'
    STATUS_CHOICES = [
        (STATUS_IN_PROGRESS, STATUS_IN_PROGRESS),
        (STATUS_DONE, STATUS_DONE),
    ]
    noi_dung = models.CharField(max_length=500)
    chi_tiet = models.TextField(blank=True, default='')
    ngay_bat_dau = models.DateTimeField(db_index=True)
    ngay_ket_thuc = models.DateTimeField(db_index=True)
    # employee ids as strings
    nguoi_thuc_hien = models.JSONField(default=list, blank=True)
    file_dinh_kem = models.CharField(max_length=512, null=True, blank=True)
    trang_thai = models.CharField(max_length=30, choices=STATUS_CHOICES, default=STATUS_IN_PROGRESS)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'lich_cong_tac'

    def __str__(self) -> str:
        return self.noi_dung


# ---------------------------------------------------------------------------
# Patient cards
# ---------------------------------------------------------------------------

class Card(models.Model):
    """A physical caregiver card in the catalog (``dm_the_cham``)."""
    STATUS_AVAILABLE = 'Đã trả thẻ'
    STATUS_BORROWED = 'Đang mượn thẻ chăm'
    STATUS_LOST = 'Mất thẻ'
    STATUS_CHOICES = [
        (STATUS_AVAILABLE, STATUS_AVAILABLE),
        (STATUS_BORROWED, STATUS_BORROWED),
        (STATUS_LOST, STATUS_LOST),
    ]
    so_the = models.CharField(max_length=50, unique=True)
    trang_thai = models.CharField(max_length=30, choices=STATUS_CHOICES, default=STATUS_AVAILABLE)
    ghi_chu = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'dm_the_cham'
        ordering = ['so_the']

    def __str__(self) -> str:
        return f"{self.so_the} ({self.trang_thai})"


class CardRecord(models.Model):
    """One lending transaction of a card to a patient's caregiver.

    The primary state goes ``Đang mượn thẻ`` -> ``Đã trả thẻ`` once; the
    deposit handover on the borrow leg and on the return leg are tracked
    independently, each with its own actor and timestamp.
    """
    STATUS_BORROWING = 'Đang mượn thẻ'
    STATUS_RETURNED = 'Đã trả thẻ'
    STATUS_CHOICES = [
        (STATUS_BORROWING, STATUS_BORROWING),
        (STATUS_RETURNED, STATUS_RETURNED),
    ]
    HANDOVER_PENDING = 'Chưa bàn giao'
    HANDOVER_DONE = 'Đã bàn giao'
    HANDOVER_CHOICES = [
        (HANDOVER_PENDING, HANDOVER_PENDING),
        (HANDOVER_DONE, HANDOVER_DONE),
    ]

    so_the = models.CharField(max_length=50, db_index=True)
    ho_ten_benh_nhan = models.CharField(max_length=255)
    nam_sinh = models.CharField(max_length=10, blank=True, default='')
    ho_ten_nguoi_cham = models.CharField(max_length=255, blank=True, default='')
    sdt_nguoi_cham = models.CharField(max_length=50, blank=True, default='')
    so_tien_cuoc = models.PositiveIntegerField(default=500000)
    ngay_muon = models.DateTimeField(db_index=True)
    nguoi_cho_muon = models.CharField(max_length=255, blank=True, default='')
    trang_thai = models.CharField(max_length=30, choices=STATUS_CHOICES, default=STATUS_BORROWING, db_index=True)

    trang_thai_tien_muon = models.CharField(max_length=30, choices=HANDOVER_CHOICES, default=HANDOVER_PENDING)
    nguoi_ban_giao_tien_muon = models.CharField(max_length=255, null=True, blank=True)
    ngay_ban_giao_tien_muon = models.DateTimeField(null=True, blank=True)

    ngay_tra = models.DateTimeField(null=True, blank=True)
    nguoi_nhan_lai_the = models.CharField(max_length=255, null=True, blank=True)
    trang_thai_tien_tra = models.CharField(max_length=30, choices=HANDOVER_CHOICES, null=True, blank=True)
    nguoi_ban_giao_tien_tra = models.CharField(max_length=255, null=True, blank=True)
    ngay_ban_giao_tien_tra = models.DateTimeField(null=True, blank=True)

    ghi_chu = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'quan_ly_the_cham'
        indexes = [
            models.Index(fields=['trang_thai', 'ngay_muon'], name='quan_ly_the_trang_t_6f1c2a_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.so_the} -> {self.ho_ten_benh_nhan} ({self.trang_thai})"


# ---------------------------------------------------------------------------
# Research topics
# ---------------------------------------------------------------------------

class ResearchTopic(models.Model):
    STATUS_IN_PROGRESS = 'Đang thực hiện'
    STATUS_ACCEPTED = 'Đã nghiệm thu'
    STATUS_CHOICES = [
        (STATUS_IN_PROGRESS, STATUS_IN_PROGRESS),
        (STATUS_ACCEPTED, STATUS_ACCEPTED),
    ]
    ten_de_tai = models.CharField(max_length=500)
    dsnv = models.ForeignKey(Employee, null=True, blank=True, on_delete=models.SET_NULL, related_name='research_topics')
    vai_tro = models.CharField(max_length=100, blank=True, default='')
    cap_quan_ly = models.CharField(max_length=100, blank=True, default='')
    trang_thai = models.CharField(max_length=30, choices=STATUS_CHOICES, default=STATUS_IN_PROGRESS)
    ngay_bat_dau = models.DateField(null=True, blank=True)
    ngay_ket_thuc = models.DateField(null=True, blank=True)
    ket_qua = models.TextField(blank=True, default='')
    # evidence file URLs
    minh_chung = models.JSONField(default=list, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL, related_name='research_created'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'nckh'

    def __str__(self) -> str:
        return self.ten_de_tai


# ---------------------------------------------------------------------------
# Access & settings
# ---------------------------------------------------------------------------

class ModulePermission(models.Model):
    """What a role may do inside one feature module."""
    role = models.CharField(max_length=10, choices=User.ROLE_CHOICES)
    module = models.CharField(max_length=64)
    can_view = models.BooleanField(default=False)
    can_add = models.BooleanField(default=False)
    can_edit = models.BooleanField(default=False)
    can_delete = models.BooleanField(default=False)

    class Meta:
        db_table = 'permissions'
        unique_together = [('role', 'module')]
        ordering = ['module', 'role']

    def __str__(self) -> str:
        return f"{self.role}:{self.module}"


class SystemSetting(models.Model):
    key = models.CharField(max_length=100, primary_key=True)
    value = models.TextField(blank=True, default='')
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'system_settings'

    def __str__(self) -> str:
        return self.key


class AuditEvent(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.CharField(max_length=64, blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='ward_audite_action_3b9e1f_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='ward_audite_object__8c4d27_idx'),
        ]

    def __str__(self):
        return f"{self.action}:{self.user_id}@{self.created_at:%F %T}"
