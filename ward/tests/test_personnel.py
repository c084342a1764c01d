"""Personnel directory: atomic saves with history lists, filters and xlsx import."""
from datetime import date

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from ward.models import Employee, FamilyMember, Salary
from ward.services import personnel as svc
from ward.services.spreadsheet import XLSX_CONTENT_TYPE, build_workbook

pytestmark = pytest.mark.django_db


def _payload(**employee):
    employee.setdefault("ho_va_ten", "Nguyễn Văn A")
    return {
        "employee": employee,
        "family": [{"moi_quan_he": "Vợ", "ho_va_ten": "Trần Thị B", "nam_sinh": 1992}],
        "work_history": [{"tu_thang_nam": "09/2012", "don_vi_cong_tac": "Khoa Nội"}],
        "training": [],
        "salary": [{"thang_nam_nhan": "01/2020", "he_so": 4.4}],
    }


def test_create_and_fetch_with_history(admin_client):
    r = admin_client.post("/api/personnel", _payload(ngay_sinh="15/3/1990", doi_tuong="Sĩ quan"), format="json")
    assert r.status_code == 201
    emp_id = r.data["data"]["id"]
    assert r.data["data"]["ngay_sinh"] == "1990-03-15"

    r = admin_client.get(f"/api/personnel/{emp_id}")
    assert r.status_code == 200
    assert [f["ho_va_ten"] for f in r.data["data"]["family"]] == ["Trần Thị B"]
    assert r.data["data"]["salary"][0]["he_so"] == 4.4
    assert r.data["data"]["training"] == []


def test_update_replaces_only_lists_that_were_sent(admin_user):
    emp = svc.create_employee({"ho_va_ten": "Lê C"}, family=[{"moi_quan_he": "Bố", "ho_va_ten": "Lê D"}],
                              salary=[{"he_so": 3.0}], user=admin_user)
    svc.update_employee(emp.pk, {"chuc_vu": "Bác sĩ"}, salary=[], user=admin_user)
    emp.refresh_from_db()
    assert emp.chuc_vu == "Bác sĩ"
    assert FamilyMember.objects.filter(dsnv=emp).count() == 1
    assert not Salary.objects.filter(dsnv=emp).exists()


def test_failed_child_insert_rolls_back_employee_update(admin_client):
    emp = svc.create_employee({"ho_va_ten": "Phạm E", "chuc_vu": "Y tá"},
                              family=[{"moi_quan_he": "Mẹ", "ho_va_ten": "Phạm F"}])
    body = _payload(ho_va_ten="Phạm E", chuc_vu="Điều dưỡng trưởng")
    body["salary"] = [{"he_so": "không phải số"}]
    r = admin_client.put(f"/api/personnel/{emp.pk}", body, format="json")
    assert r.status_code == 400
    emp.refresh_from_db()
    assert emp.chuc_vu == "Y tá"
    assert list(FamilyMember.objects.filter(dsnv=emp).values_list("ho_va_ten", flat=True)) == ["Phạm F"]


def test_name_is_required():
    with pytest.raises(ValueError):
        svc.create_employee({"ho_va_ten": "  "})
    assert not Employee.objects.exists()


def test_category_and_search_filters(admin_client):
    Employee.objects.create(ho_va_ten="An", doi_tuong="Sĩ quan", cccd="0011")
    Employee.objects.create(ho_va_ten="Bình", doi_tuong="Sỹ quan")
    Employee.objects.create(ho_va_ten="Cường", doi_tuong="QNCN", trang_thai="Đang công tác")
    Employee.objects.create(ho_va_ten="Dũng", trang_thai="Đã chuyển công tác")

    names = [e.ho_va_ten for e in svc.list_employees(category="Sĩ quan")[0]]
    assert names == ["An", "Bình"]
    names = [e.ho_va_ten for e in svc.list_employees(category="Đã chuyển công tác")[0]]
    assert names == ["Dũng"]
    assert [e.ho_va_ten for e in svc.list_employees(q="0011")[0]] == ["An"]

    r = admin_client.get("/api/personnel", {"page": 2, "pageSize": 3})
    assert r.status_code == 200
    assert r.data["pagination"] == {"page": 2, "pageSize": 3, "total": 4}
    assert [e["ho_va_ten"] for e in r.data["data"]] == ["Dũng"]


def test_bulk_update_status(admin_client):
    a = Employee.objects.create(ho_va_ten="A")
    b = Employee.objects.create(ho_va_ten="B")
    body = {"ids": [a.pk, b.pk], "status": "Đã chuyển công tác"}
    for _ in range(2):
        r = admin_client.post("/api/personnel/bulk-update", body, format="json")
        assert r.status_code == 200
        assert r.data["updated"] == 2
    assert set(Employee.objects.values_list("trang_thai", flat=True)) == {"Đã chuyển công tác"}


def _sheet(rows):
    content = build_workbook(svc.IMPORT_HEADERS + [svc.OPTIONAL_HEADER], rows, "Danh sách nhân sự")
    return SimpleUploadedFile("nhan_su.xlsx", content, content_type=XLSX_CONTENT_TYPE)


def test_import_creates_named_rows_and_parses_dates(admin_client):
    row = ["Hoàng G", 32874, "Nam", "Thiếu tá", "Bác sĩ", "0123", "01/01/2021", None, None,
           "Nam Định", "Hà Nội", "0988", None, None, "2015-06-01", "Đang công tác", "Sĩ quan"]
    r = admin_client.post("/api/personnel/import", {"file": _sheet([row, [None, "01/01/2000"]])}, format="multipart")
    assert r.status_code == 201
    assert r.data == {"ok": True, "created": 1}
    emp = Employee.objects.get()
    assert emp.ngay_sinh == date(1990, 1, 1)
    assert emp.ngay_ve_khoa_cong_tac == date(2015, 6, 1)
    assert emp.ngay_cap_cccd == date(2021, 1, 1)
    assert emp.doi_tuong is None
    assert emp.dien_quan_ly == "Sĩ quan"


def test_import_without_valid_rows_is_rejected(admin_client):
    r = admin_client.post("/api/personnel/import", {"file": _sheet([[None, "x"]])}, format="multipart")
    assert r.status_code == 400
    assert not Employee.objects.exists()


def test_template_download(admin_client):
    r = admin_client.get("/api/personnel/template")
    assert r.status_code == 200
    assert r["Content-Type"] == XLSX_CONTENT_TYPE
