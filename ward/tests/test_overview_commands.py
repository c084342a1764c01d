from datetime import timedelta
from io import StringIO

import pytest
from django.core.management import CommandError, call_command
from django.utils import timezone

from ward.models import Card, CardRecord, Employee, LeaveRecord, ModulePermission, User
from ward.services.personnel import import_template

pytestmark = pytest.mark.django_db


def test_overview_counts(admin_client):
    Employee.objects.create(ho_va_ten="A", trang_thai="Đang công tác", doi_tuong="Sĩ quan")
    Employee.objects.create(ho_va_ten="B", trang_thai="Đang công tác", doi_tuong="QNCN")
    Card.objects.create(so_the="O1", trang_thai=Card.STATUS_BORROWED)
    CardRecord.objects.create(so_the="O1", ho_ten_benh_nhan="X", ngay_muon=timezone.now())
    today = timezone.localdate()
    LeaveRecord.objects.create(ho_va_ten="A", tu_ngay=today - timedelta(days=1), den_ngay=today)

    r = admin_client.get("/api/overview")
    assert r.status_code == 200
    data = r.data["data"]
    assert data["employees"]["total"] == 2
    assert data["employees"]["byStatus"] == {"Đang công tác": 2}
    assert data["cards"] == {Card.STATUS_BORROWED: 1}
    assert data["activeBorrows"] == 1
    assert data["onLeaveToday"] == 1


def test_healthz(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["ok"] is True


def test_seed_permissions_command_is_idempotent():
    out = StringIO()
    call_command("seed_permissions", stdout=out)
    total = ModulePermission.objects.count()
    assert total > 0
    call_command("seed_permissions", stdout=out)
    assert ModulePermission.objects.count() == total


def test_ensure_test_users_resets_password():
    call_command("ensure_test_users", stdout=StringIO())
    admin = User.objects.get(username="admin")
    admin.set_password("other")
    admin.save()
    call_command("ensure_test_users", stdout=StringIO())
    admin.refresh_from_db()
    assert admin.role == User.ROLE_ADMIN
    assert admin.check_password("123456")


def test_import_personnel_command(tmp_path):
    path = tmp_path / "nhan_su.xlsx"
    path.write_bytes(import_template())
    out = StringIO()
    call_command("import_personnel", str(path), stdout=out)
    assert Employee.objects.filter(ho_va_ten="Nguyễn Văn A").exists()
    assert "Imported 1" in out.getvalue()

    with pytest.raises(CommandError):
        call_command("import_personnel", str(tmp_path / "missing.xlsx"))
