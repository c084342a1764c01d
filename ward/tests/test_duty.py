"""Duty roster and the daily absence roster built from it."""
from datetime import date

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from ward.models import Absence, DutySchedule, Employee, ModulePermission
from ward.services import absence as absence_svc
from ward.services import duty as svc
from ward.services.spreadsheet import XLSX_CONTENT_TYPE, build_workbook, read_rows
from .conftest import client_for

pytestmark = pytest.mark.django_db


def test_split_names_accepts_commas_and_newlines():
    assert svc.split_names("Lan, Hoa\nMai ,\n") == ["Lan", "Hoa", "Mai"]
    assert svc.split_names(None) == []


def test_month_and_year_filters(admin_client):
    for day in (date(2024, 1, 31), date(2024, 2, 1), date(2024, 2, 29), date(2025, 2, 1)):
        DutySchedule.objects.create(ngay_truc=day, bac_sy="BS A")
    r = admin_client.get("/api/duty", {"month": 2, "year": 2024})
    assert r.status_code == 200
    assert [x["ngay_truc"] for x in r.data["data"]] == ["2024-02-01", "2024-02-29"]
    assert len(admin_client.get("/api/duty", {"year": 2024}).data["data"]) == 3
    assert len(admin_client.get("/api/duty").data["data"]) == 4
    assert admin_client.get("/api/duty", {"month": 2}).status_code == 400
    assert admin_client.get("/api/duty", {"month": 13, "year": 2024}).status_code == 400


def test_duty_crud(admin_client):
    r = admin_client.post("/api/duty", {"ngay_truc": "05/06/2024", "dieu_duong": "Lan, Hoa"}, format="json")
    assert r.status_code == 201
    did = r.data["data"]["id"]
    assert r.data["data"]["ngay_truc"] == "2024-06-05"

    r = admin_client.put(f"/api/duty/{did}", {"ghi_chu": "Đổi ca"}, format="json")
    assert r.status_code == 200
    assert r.data["data"]["dieu_duong"] == "Lan, Hoa"

    assert admin_client.post("/api/duty", {"bac_sy": "BS A"}, format="json").status_code == 400
    assert admin_client.delete(f"/api/duty/{did}").status_code == 200
    assert admin_client.delete(f"/api/duty/{did}").status_code == 404


def test_import_is_all_or_nothing(admin_client):
    good = build_workbook(["Ngày trực"] + [h for _, h in svc.DUTY_COLUMNS[1:]],
                          [["2024-06-01", "BS A", "", "Lan", "", ""], ["02/06/2024", "BS B", "", "Hoa", "", "Lễ"]])
    upload = SimpleUploadedFile("duty.xlsx", good, content_type=XLSX_CONTENT_TYPE)
    r = admin_client.post("/api/duty/import", {"file": upload}, format="multipart")
    assert r.status_code == 200
    assert r.data["success"] == 2
    assert DutySchedule.objects.get(ngay_truc=date(2024, 6, 2)).ghi_chu == "Lễ"

    bad = build_workbook(["Ngày trực"], [["2024-06-03"], ["không phải ngày"]])
    upload = SimpleUploadedFile("duty.xlsx", bad, content_type=XLSX_CONTENT_TYPE)
    r = admin_client.post("/api/duty/import", {"file": upload}, format="multipart")
    assert r.status_code == 400
    assert not DutySchedule.objects.filter(ngay_truc=date(2024, 6, 3)).exists()


def test_export_follows_month_filter(admin_client):
    DutySchedule.objects.create(ngay_truc=date(2024, 6, 1), bac_sy="BS A", dieu_duong="Lan")
    DutySchedule.objects.create(ngay_truc=date(2024, 7, 1), bac_sy="BS B")
    r = admin_client.get("/api/duty/export", {"month": 6, "year": 2024})
    assert r.status_code == 200
    rows = read_rows(SimpleUploadedFile("x.xlsx", r.content))
    assert len(rows) == 1
    assert rows[0][0] == "01/06/2024"
    assert rows[0][1] == "BS A"


def test_generate_from_previous_day_nurses(admin_user):
    lan = Employee.objects.create(ho_va_ten="Nguyễn Thị Lan")
    DutySchedule.objects.create(ngay_truc=date(2024, 6, 4), dieu_duong="nguyễn thị lan,\nNgười Ngoài")
    created = absence_svc.generate_from_duty(date(2024, 6, 5), user=admin_user)
    assert len(created) == 2
    matched = Absence.objects.get(dsnv=lan)
    assert matched.ngay_nghi == date(2024, 6, 5)
    assert matched.loai_nghi == Absence.TYPE_POST_DUTY
    assert matched.ho_va_ten == "Nguyễn Thị Lan"
    assert matched.ghi_chu == "Tự động tạo từ lịch trực ngày 2024-06-04"
    stranger = Absence.objects.get(dsnv__isnull=True)
    assert stranger.ho_va_ten == "Người Ngoài"
    assert stranger.ghi_chu == absence_svc.UNMATCHED_NOTE

    assert absence_svc.generate_from_duty(date(2024, 6, 5), user=admin_user) == []
    assert Absence.objects.count() == 2


def test_generate_needs_a_roster_with_nurses(admin_client):
    r = admin_client.post("/api/absence/generate", {"ngay_nghi": "2024-06-05"}, format="json")
    assert r.status_code == 400
    DutySchedule.objects.create(ngay_truc=date(2024, 6, 4), bac_sy="BS A")
    r = admin_client.post("/api/absence/generate", {"ngay_nghi": "2024-06-05"}, format="json")
    assert r.status_code == 400
    assert not Absence.objects.exists()


def test_absence_day_list_and_edit(admin_client):
    emp = Employee.objects.create(ho_va_ten="Trần Văn Minh")
    r = admin_client.post("/api/absence", {"dsnv_id": emp.pk, "loai_nghi": "Nghỉ ốm", "ngay_nghi": "2024-06-05"},
                          format="json")
    assert r.status_code == 201
    aid = r.data["data"]["id"]
    assert r.data["data"]["ho_va_ten"] == "Trần Văn Minh"

    assert [x["id"] for x in admin_client.get("/api/absence", {"date": "2024-06-05"}).data["data"]] == [aid]
    assert admin_client.get("/api/absence", {"date": "2024-06-06"}).data["data"] == []
    assert admin_client.get("/api/absence", {"date": "05/06"}).status_code == 400

    r = admin_client.put(f"/api/absence/{aid}", {"ghi_chu": "Có giấy"}, format="json")
    assert r.status_code == 200
    assert admin_client.post("/api/absence", {"ngay_nghi": "2024-06-05"}, format="json").status_code == 400
    assert admin_client.delete(f"/api/absence/{aid}").status_code == 200


def test_copy_skips_employees_already_listed(admin_client):
    a = Employee.objects.create(ho_va_ten="A")
    b = Employee.objects.create(ho_va_ten="B")
    src = [Absence.objects.create(dsnv=a, ho_va_ten="A", ngay_nghi=date(2024, 6, 5), ghi_chu="Trực đêm"),
           Absence.objects.create(dsnv=b, ho_va_ten="B", ngay_nghi=date(2024, 6, 5))]
    Absence.objects.create(dsnv=b, ho_va_ten="B", ngay_nghi=date(2024, 6, 6))
    r = admin_client.post("/api/absence/copy", {"ids": [x.pk for x in src], "ngay_nghi": "2024-06-06"},
                          format="json")
    assert r.status_code == 201
    assert r.data["copied"] == 1
    copy = Absence.objects.get(dsnv=a, ngay_nghi=date(2024, 6, 6))
    assert copy.ghi_chu == "Trực đêm (Sao chép)"
    assert Absence.objects.filter(dsnv=b, ngay_nghi=date(2024, 6, 6)).count() == 1


def test_absence_and_duty_have_their_own_modules(plain_user):
    client = client_for(plain_user)
    ModulePermission.objects.create(role=plain_user.role, module="duty", can_view=True)
    assert client.get("/api/duty").status_code == 200
    assert client.get("/api/absence").status_code == 403
    assert client.post("/api/duty", {"ngay_truc": "2024-06-01"}, format="json").status_code == 403
