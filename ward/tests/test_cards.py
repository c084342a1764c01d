"""Patient-card lending: catalog sync, duplicate warning, handover and list filters."""
from datetime import date, datetime, timedelta
from itertools import permutations

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.utils import timezone

from ward.models import Card, CardRecord, ModulePermission
from ward.services import cards as svc
from ward.services.spreadsheet import XLSX_CONTENT_TYPE, build_workbook
from .conftest import client_for

pytestmark = pytest.mark.django_db

TODAY = date(2024, 5, 20)


def _rec(name, so_the, day, status=CardRecord.STATUS_BORROWING, carer=""):
    return {"ho_ten_benh_nhan": name, "so_the": so_the, "ho_ten_nguoi_cham": carer,
            "ngay_muon": datetime.combine(day, datetime.min.time()).replace(hour=9), "trang_thai": status}


RECORDS = [
    _rec("Nguyễn Văn An", "T01", TODAY),
    _rec("Trần Thị Bình", "T02", TODAY - timedelta(days=1), CardRecord.STATUS_RETURNED, carer="Lê Văn An"),
    _rec("Phạm Minh", "T03", TODAY - timedelta(days=3)),
    _rec("Hoàng Lan", "T04", TODAY - timedelta(days=10), CardRecord.STATUS_RETURNED),
]


def test_search_matches_patient_carer_and_card_number():
    names = [r["so_the"] for r in svc.search_filter(RECORDS, "an")]
    assert names == ["T01", "T02", "T04"]
    assert [r["so_the"] for r in svc.search_filter(RECORDS, "t03")] == ["T03"]
    assert svc.search_filter(RECORDS, "  ") == RECORDS


@pytest.mark.parametrize("bucket, kwargs, expected", [
    ("all", {}, ["T01", "T02", "T03", "T04"]),
    ("today", {}, ["T01"]),
    ("yesterday", {}, ["T02"]),
    ("days_ago", {"days": 3}, ["T03"]),
    ("custom", {"start": TODAY - timedelta(days=3), "end": TODAY - timedelta(days=1)}, ["T02", "T03"]),
    ("custom", {"start": TODAY - timedelta(days=1)}, ["T01", "T02"]),
])
def test_date_buckets(bucket, kwargs, expected):
    out = svc.date_filter(RECORDS, bucket, today=TODAY, **kwargs)
    assert [r["so_the"] for r in out] == expected


def test_status_filter():
    assert [r["so_the"] for r in svc.status_filter(RECORDS, "borrowing")] == ["T01", "T03"]
    assert [r["so_the"] for r in svc.status_filter(RECORDS, "returned")] == ["T02", "T04"]
    assert len(svc.status_filter(RECORDS, None)) == 4
    with pytest.raises(ValueError):
        svc.status_filter(RECORDS, "lost")


def test_filters_compose_in_any_order():
    steps = {
        "search": lambda rs: svc.search_filter(rs, "an"),
        "date": lambda rs: svc.date_filter(rs, "custom", start=TODAY - timedelta(days=10), end=TODAY, today=TODAY),
        "status": lambda rs: svc.status_filter(rs, "returned"),
    }
    results = set()
    for order in permutations(steps):
        out = RECORDS
        for key in order:
            out = steps[key](out)
        results.add(tuple(r["so_the"] for r in out))
    assert results == {("T02", "T04")}


def test_borrow_marks_catalog_and_warns_on_second_borrow(admin_user):
    Card.objects.create(so_the="T10")
    first, warning = svc.borrow_card({"so_the": "T10", "ho_ten_benh_nhan": "Nguyễn Văn Hùng"}, user=admin_user)
    assert warning is None
    assert first.so_tien_cuoc == 500000
    assert first.nguoi_cho_muon == "Quản trị"
    assert first.trang_thai_tien_muon == CardRecord.HANDOVER_PENDING
    assert Card.objects.get(so_the="T10").trang_thai == Card.STATUS_BORROWED

    second, warning = svc.borrow_card({"so_the": "T11", "ho_ten_benh_nhan": "Văn Hùng"}, user=admin_user)
    day = timezone.localtime(first.ngay_muon).strftime("%d/%m/%Y")
    assert warning == f"CẢNH BÁO: Bệnh nhân Nguyễn Văn Hùng đã mượn thẻ T10 ngày {day}, người cho mượn: Quản trị"
    assert second.pk != first.pk


def test_return_is_one_way(admin_user):
    Card.objects.create(so_the="T20", trang_thai=Card.STATUS_BORROWED)
    rec, _ = svc.borrow_card({"so_the": "T20", "ho_ten_benh_nhan": "Bệnh nhân A"}, user=admin_user)
    returned = svc.return_card(rec.pk, {"nguoi_nhan_lai_the": "Điều dưỡng B"}, user=admin_user)
    assert returned.trang_thai == CardRecord.STATUS_RETURNED
    assert returned.ngay_tra is not None
    assert returned.trang_thai_tien_tra == CardRecord.HANDOVER_PENDING
    assert Card.objects.get(so_the="T20").trang_thai == Card.STATUS_AVAILABLE
    with pytest.raises(ValueError):
        svc.return_card(rec.pk, {}, user=admin_user)


def test_handover_batch_is_idempotent_and_reports_missing_ids(admin_client):
    recs = [CardRecord.objects.create(so_the=f"H{i}", ho_ten_benh_nhan=f"BN {i}", ngay_muon=timezone.now())
            for i in range(2)]
    ids = [r.pk for r in recs] + [9999]
    body = {"ids": ids, "type": "borrow", "trang_thai": CardRecord.HANDOVER_DONE,
            "nguoi_ban_giao": "Kế toán", "ngay_ban_giao": "2024-05-20T08:00:00"}
    for _ in range(2):
        r = admin_client.post("/api/card-records/handover", body, format="json")
        assert r.status_code == 200
        assert r.data["updated"] == ids[:2]
        assert r.data["failed"] == [9999]
        assert r.data["ok"] is False
    for rec in recs:
        rec.refresh_from_db()
        assert rec.trang_thai_tien_muon == CardRecord.HANDOVER_DONE
        assert rec.nguoi_ban_giao_tien_muon == "Kế toán"
        assert rec.trang_thai_tien_tra is None


def test_record_list_api_filters(admin_client):
    now = timezone.now()
    CardRecord.objects.create(so_the="A1", ho_ten_benh_nhan="Lê Hoa", ngay_muon=now)
    CardRecord.objects.create(so_the="A2", ho_ten_benh_nhan="Lê Mai", ngay_muon=now,
                              trang_thai=CardRecord.STATUS_RETURNED)
    r = admin_client.get("/api/card-records", {"q": "lê", "status": "borrowing", "date": "today"})
    assert r.status_code == 200
    assert [x["so_the"] for x in r.data["data"]] == ["A1"]

    r = admin_client.get("/api/card-records", {"status": "lost"})
    assert r.status_code == 400
    assert r.data["ok"] is False


def test_borrow_and_return_through_api(admin_client):
    Card.objects.create(so_the="B1")
    r = admin_client.post("/api/card-records", {"so_the": "B1", "ho_ten_benh_nhan": "Đỗ Nam"}, format="json")
    assert r.status_code == 201
    assert r.data["warning"] is None
    rid = r.data["data"]["id"]

    r = admin_client.post(f"/api/card-records/{rid}/return", {}, format="json")
    assert r.status_code == 200
    assert r.data["data"]["trang_thai"] == CardRecord.STATUS_RETURNED

    r = admin_client.post(f"/api/card-records/{rid}/return", {}, format="json")
    assert r.status_code == 400
    assert r.data["error"]["code"] == "invalid"

    r = admin_client.get("/api/card-records/12345")
    assert r.status_code == 404


def test_duplicate_catalog_card_rejected(admin_client):
    assert admin_client.post("/api/cards", {"so_the": "C1"}, format="json").status_code == 201
    r = admin_client.post("/api/cards", {"so_the": "C1"}, format="json")
    assert r.status_code == 400


def test_card_status_batch(admin_client):
    c1 = Card.objects.create(so_the="S1")
    r = admin_client.post("/api/cards/status", {"ids": [c1.pk, 777], "trang_thai": Card.STATUS_LOST}, format="json")
    assert r.status_code == 200
    assert r.data["updated"] == [c1.pk]
    assert r.data["failed"] == [777]
    c1.refresh_from_db()
    assert c1.trang_thai == Card.STATUS_LOST


def test_module_permission_gates_card_endpoints(plain_user):
    client = client_for(plain_user)
    assert client.get("/api/cards").status_code == 403

    ModulePermission.objects.create(role=plain_user.role, module="patient-card-management", can_view=True)
    assert client.get("/api/cards").status_code == 200
    assert client.post("/api/cards", {"so_the": "X"}, format="json").status_code == 403


def test_export_then_import_records(admin_client):
    CardRecord.objects.create(so_the="E1", ho_ten_benh_nhan="Xuất Một", ngay_muon=timezone.now())
    r = admin_client.get("/api/card-records/export")
    assert r.status_code == 200
    assert r["Content-Type"].startswith("application/vnd.openxmlformats")

    upload = SimpleUploadedFile("records.xlsx", r.content,
                                content_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")
    r = admin_client.post("/api/card-records/import", {"file": upload}, format="multipart")
    assert r.status_code == 200
    assert r.data["success"] == 1
    assert CardRecord.objects.filter(so_the="E1").count() == 2


def _returned_record(user):
    Card.objects.create(so_the="R1")
    rec, _ = svc.borrow_card({"so_the": "R1", "ho_ten_benh_nhan": "Bệnh nhân Trả"}, user=user)
    return svc.return_card(rec.pk, {}, user=user)


def test_record_edit_keeps_details_editable(admin_client, admin_user):
    rec = _returned_record(admin_user)
    r = admin_client.put(f"/api/card-records/{rec.pk}",
                         {"ho_ten_nguoi_cham": "Người chăm mới", "ghi_chu": "<b>đã gọi</b>",
                          "trang_thai_tien_tra": CardRecord.HANDOVER_DONE, "trang_thai": CardRecord.STATUS_RETURNED},
                         format="json")
    assert r.status_code == 200
    rec.refresh_from_db()
    assert rec.ho_ten_nguoi_cham == "Người chăm mới"
    assert rec.ghi_chu == "đã gọi"
    assert rec.trang_thai_tien_tra == CardRecord.HANDOVER_DONE
    assert rec.trang_thai == CardRecord.STATUS_RETURNED


@pytest.mark.parametrize("body", [
    {"trang_thai": "bogus"},
    {"trang_thai_tien_muon": "xyz"},
    {"trang_thai_tien_tra": "xyz"},
    {"so_tien_cuoc": -5},
    {"ho_ten_benh_nhan": "   "},
])
def test_record_edit_rejects_invalid_values(admin_client, admin_user, body):
    rec = _returned_record(admin_user)
    r = admin_client.put(f"/api/card-records/{rec.pk}", body, format="json")
    assert r.status_code == 400
    assert r.data["ok"] is False
    fresh = CardRecord.objects.get(pk=rec.pk)
    assert (fresh.trang_thai, fresh.trang_thai_tien_muon, fresh.so_tien_cuoc) == \
        (rec.trang_thai, rec.trang_thai_tien_muon, rec.so_tien_cuoc)


def test_returned_record_cannot_be_reopened(admin_client, admin_user):
    rec = _returned_record(admin_user)
    r = admin_client.put(f"/api/card-records/{rec.pk}", {"trang_thai": CardRecord.STATUS_BORROWING}, format="json")
    assert r.status_code == 400
    assert r.data["error"]["code"] == "invalid"
    rec.refresh_from_db()
    assert rec.trang_thai == CardRecord.STATUS_RETURNED
    assert rec.ngay_tra is not None
    assert Card.objects.get(so_the="R1").trang_thai == Card.STATUS_AVAILABLE

    r = admin_client.put(f"/api/card-records/{rec.pk}", {"ngay_tra": None}, format="json")
    assert r.status_code == 400


def test_borrowing_record_takes_no_return_details(admin_user):
    rec, _ = svc.borrow_card({"so_the": "R2", "ho_ten_benh_nhan": "Bệnh nhân Mượn"}, user=admin_user)
    with pytest.raises(ValueError):
        svc.update_card_record(rec.pk, {"trang_thai": CardRecord.STATUS_RETURNED}, user=admin_user)
    with pytest.raises(ValueError):
        svc.update_card_record(rec.pk, {"ngay_tra": timezone.now()}, user=admin_user)
    with pytest.raises(ValueError):
        svc.update_card_record(rec.pk, {"so_tien_cuoc": -1}, user=admin_user)
    rec.refresh_from_db()
    assert rec.trang_thai == CardRecord.STATUS_BORROWING
    assert rec.ngay_tra is None


def test_catalog_status_must_be_known(admin_client):
    r = admin_client.post("/api/cards", {"so_the": "Z2", "trang_thai": "garbage"}, format="json")
    assert r.status_code == 400
    assert not Card.objects.filter(so_the="Z2").exists()

    card = Card.objects.create(so_the="Z3")
    r = admin_client.put(f"/api/cards/{card.pk}", {"trang_thai": "garbage"}, format="json")
    assert r.status_code == 400
    card.refresh_from_db()
    assert card.trang_thai == Card.STATUS_AVAILABLE

    r = admin_client.put(f"/api/cards/{card.pk}", {"trang_thai": Card.STATUS_LOST}, format="json")
    assert r.status_code == 200
    assert r.data["data"]["trang_thai"] == Card.STATUS_LOST


def test_card_import_counts_unknown_status_as_failed(admin_client):
    content = build_workbook(svc.CARD_HEADERS, [["Z1", "whatever", ""], ["Z4", None, "mới"]])
    upload = SimpleUploadedFile("cards.xlsx", content, content_type=XLSX_CONTENT_TYPE)
    r = admin_client.post("/api/cards/import", {"file": upload}, format="multipart")
    assert r.status_code == 200
    assert (r.data["success"], r.data["failed"]) == (1, 1)
    assert not Card.objects.filter(so_the="Z1").exists()
    assert Card.objects.get(so_the="Z4").trang_thai == Card.STATUS_AVAILABLE
