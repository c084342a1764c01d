from datetime import date, datetime, timedelta

import pytest
from django.utils import timezone

from ward.models import Employee, Schedule
from ward.services import schedules as svc

WEDNESDAY = date(2024, 5, 22)


def _at(day, hour=8):
    return timezone.make_aware(datetime(day.year, day.month, day.day, hour))


def _sched(text, first, last, performers=(), status=Schedule.STATUS_IN_PROGRESS):
    return Schedule(noi_dung=text, ngay_bat_dau=_at(first), ngay_ket_thuc=_at(last, 17),
                    nguoi_thuc_hien=list(performers), trang_thai=status)


def test_bucket_ranges():
    assert svc.bucket_range("today", today=WEDNESDAY) == (WEDNESDAY, WEDNESDAY)
    assert svc.bucket_range("week", today=WEDNESDAY) == (date(2024, 5, 20), date(2024, 5, 26))
    assert svc.bucket_range("month", today=WEDNESDAY) == (date(2024, 5, 1), date(2024, 5, 31))
    assert svc.bucket_range("month", today=date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))
    assert svc.bucket_range("all", today=WEDNESDAY) == (None, None)


def test_filter_uses_overlap_and_searches_performer_names():
    items = [
        _sched("Giao ban", WEDNESDAY, WEDNESDAY, performers=["1"]),
        _sched("Hội chẩn", WEDNESDAY - timedelta(days=5), WEDNESDAY - timedelta(days=2)),
        _sched("Tập huấn", WEDNESDAY - timedelta(days=10), WEDNESDAY + timedelta(days=10), performers=["2", "x"]),
    ]
    people = [{"id": 1, "ho_va_ten": "Nguyễn An"}, {"id": 2, "ho_va_ten": "Lê Bình"}]

    week = svc.filter_schedules(items, "week", employees=people, today=WEDNESDAY)
    assert [s.noi_dung for s in week] == ["Giao ban", "Hội chẩn", "Tập huấn"]
    today = svc.filter_schedules(items, "today", employees=people, today=WEDNESDAY)
    assert [s.noi_dung for s in today] == ["Giao ban", "Tập huấn"]
    found = svc.filter_schedules(items, "all", q="bình", employees=people, today=WEDNESDAY)
    assert [s.noi_dung for s in found] == ["Tập huấn"]
    with pytest.raises(ValueError):
        svc.filter_schedules(items, "year", employees=people)


def test_resolve_performers_keeps_unknown_ids():
    people = [{"id": 1, "ho_va_ten": "Nguyễn An"}]
    assert svc.resolve_performers([1, "9"], people) == ["Nguyễn An", "9"]


def test_display_status_is_derived():
    now = _at(WEDNESDAY, 12)
    past = _sched("a", WEDNESDAY - timedelta(days=3), WEDNESDAY - timedelta(days=1))
    assert svc.display_status(past, now) == Schedule.STATUS_OVERDUE
    past.trang_thai = Schedule.STATUS_DONE
    assert svc.display_status(past, now) == Schedule.STATUS_DONE
    assert svc.display_status(_sched("b", WEDNESDAY, WEDNESDAY), now) == Schedule.STATUS_IN_PROGRESS


def test_parse_performers():
    assert svc.parse_performers('[1, "2"]') == ["1", "2"]
    assert svc.parse_performers(None) == []
    with pytest.raises(ValueError):
        svc.parse_performers("{}")


@pytest.mark.django_db
def test_overdue_status_cannot_be_stored(admin_client):
    body = {"noi_dung": "Kiểm tra", "ngay_bat_dau": "2024-05-20T08:00:00", "ngay_ket_thuc": "2024-05-20T10:00:00",
            "trang_thai": Schedule.STATUS_OVERDUE}
    r = admin_client.post("/api/schedules", body, format="json")
    assert r.status_code == 400
    assert not Schedule.objects.exists()


@pytest.mark.django_db
def test_end_before_start_is_rejected(admin_client):
    body = {"noi_dung": "Kiểm tra", "ngay_bat_dau": "2024-05-20T10:00:00", "ngay_ket_thuc": "2024-05-20T08:00:00"}
    assert admin_client.post("/api/schedules", body, format="json").status_code == 400


@pytest.mark.django_db
def test_create_and_list_with_names(admin_client):
    emp = Employee.objects.create(ho_va_ten="Trần Cúc")
    body = {"noi_dung": "Trực Tết", "ngay_bat_dau": "2020-01-01T08:00:00", "ngay_ket_thuc": "2020-01-02T08:00:00",
            "nguoi_thuc_hien": [emp.pk]}
    r = admin_client.post("/api/schedules", body, format="json")
    assert r.status_code == 201
    assert r.data["data"]["nguoi_thuc_hien"] == [str(emp.pk)]
    assert r.data["data"]["nguoi_thuc_hien_ten"] == ["Trần Cúc"]
    assert r.data["data"]["trang_thai_hien_thi"] == Schedule.STATUS_OVERDUE

    r = admin_client.put(f"/api/schedules/{r.data['data']['id']}", {"trang_thai": Schedule.STATUS_DONE}, format="json")
    assert r.status_code == 200
    assert r.data["data"]["trang_thai_hien_thi"] == Schedule.STATUS_DONE


@pytest.mark.django_db
def test_calendar_groups_by_covered_day(admin_client):
    Schedule.objects.create(noi_dung="Ba ngày", ngay_bat_dau=_at(date(2024, 5, 20)),
                            ngay_ket_thuc=_at(date(2024, 5, 22), 17))
    r = admin_client.get("/api/schedules/calendar", {"start": "2024-05-21", "end": "2024-05-23"})
    assert r.status_code == 200
    counts = {d: len(items) for d, items in r.data["data"].items()}
    assert counts == {"2024-05-21": 1, "2024-05-22": 1, "2024-05-23": 0}
