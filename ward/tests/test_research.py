import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from ward.models import Employee, ResearchTopic
from ward.services import research as svc

pytestmark = pytest.mark.django_db


def test_pagination_and_search(admin_client):
    for i in range(12):
        ResearchTopic.objects.create(ten_de_tai=f"Đề tài {i}", cap_quan_ly="Cấp bệnh viện" if i % 2 else "Cấp cơ sở")
    r = admin_client.get("/api/research", {"page": 2, "pageSize": 5})
    assert r.status_code == 200
    assert r.data["pagination"] == {"page": 2, "pageSize": 5, "total": 12}
    assert len(r.data["data"]) == 5

    r = admin_client.get("/api/research", {"q": "bệnh viện"})
    assert r.data["pagination"]["total"] == 6


def test_clone_copies_fields_and_evidence(admin_user):
    emp = Employee.objects.create(ho_va_ten="Vũ H")
    src = svc.create_topic({"ten_de_tai": "Kháng sinh", "dsnv_id": emp.pk, "vai_tro": "Chủ nhiệm",
                            "trang_thai": ResearchTopic.STATUS_ACCEPTED, "minh_chung": ["/media/a.pdf"]},
                           user=admin_user)
    copy = svc.clone_topic(src.pk, user=admin_user)
    assert copy.pk != src.pk
    assert copy.ten_de_tai == "Kháng sinh (Bản sao)"
    assert copy.dsnv_id == emp.pk
    assert copy.minh_chung == ["/media/a.pdf"]

    copy.minh_chung.append("/media/b.pdf")
    copy.save()
    src.refresh_from_db()
    assert src.minh_chung == ["/media/a.pdf"]


def test_invalid_status_rejected():
    with pytest.raises(ValueError):
        svc.create_topic({"ten_de_tai": "X", "trang_thai": "Hủy"})


def test_evidence_upload_appends_urls(admin_client):
    topic = ResearchTopic.objects.create(ten_de_tai="Y", minh_chung=["/media/old.pdf"])
    f = SimpleUploadedFile("bao_cao.pdf", b"%PDF-1.4 test", content_type="application/pdf")
    r = admin_client.post(f"/api/research/{topic.pk}/evidence", {"files": [f]}, format="multipart")
    assert r.status_code == 200
    topic.refresh_from_db()
    assert len(topic.minh_chung) == 2
    assert topic.minh_chung[0] == "/media/old.pdf"
    assert topic.minh_chung[1].endswith(".pdf")
    assert "/file_nckh/" in topic.minh_chung[1]


def test_evidence_rejects_unsupported_type(admin_client):
    f = SimpleUploadedFile("run.sh", b"echo", content_type="text/x-shellscript")
    r = admin_client.post("/api/research/evidence", {"files": [f]}, format="multipart")
    assert r.status_code == 400
