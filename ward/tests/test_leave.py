from datetime import date

import pytest

from ward.models import Employee, LeaveRecord
from ward.services import leave as svc

pytestmark = pytest.mark.django_db


def test_create_snapshots_employee_fields(admin_user):
    emp = Employee.objects.create(ho_va_ten="Đinh K", cap_bac="Đại úy", chuc_vu="Bác sĩ")
    rec = svc.create_leave({"dsnv_id": emp.pk, "loai_nghi": "Phép năm", "tu_ngay": "01/06/2024",
                            "den_ngay": "05/06/2024"}, user=admin_user)
    assert (rec.ho_va_ten, rec.cap_bac, rec.chuc_vu) == ("Đinh K", "Đại úy", "Bác sĩ")
    assert rec.created_by == admin_user

    emp.delete()
    rec.refresh_from_db()
    assert rec.dsnv_id is None
    assert rec.ho_va_ten == "Đinh K"


def test_range_and_name_are_checked():
    with pytest.raises(ValueError):
        svc.create_leave({"ho_va_ten": "A", "tu_ngay": "2024-06-05", "den_ngay": "2024-06-01"})
    with pytest.raises(ValueError):
        svc.create_leave({"loai_nghi": "Tranh thủ"})
    assert not LeaveRecord.objects.exists()


def test_leaves_on_date(admin_client):
    LeaveRecord.objects.create(ho_va_ten="A", tu_ngay=date(2024, 6, 1), den_ngay=date(2024, 6, 3))
    LeaveRecord.objects.create(ho_va_ten="B", tu_ngay=date(2024, 6, 4), den_ngay=date(2024, 6, 4))
    r = admin_client.get("/api/leave", {"date": "2024-06-03"})
    assert r.status_code == 200
    assert [x["ho_va_ten"] for x in r.data["data"]] == ["A"]
    assert admin_client.get("/api/leave", {"date": "03/06"}).status_code == 400
