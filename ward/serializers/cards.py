import bleach
from rest_framework import serializers

HANDOVER = ['Chưa bàn giao', 'Đã bàn giao']


def _clean_text(v):
    return bleach.clean((v or '').strip(), strip=True)


class RecordListQuerySerializer(serializers.Serializer):
    q = serializers.CharField(max_length=100, required=False, allow_blank=True)
    date = serializers.ChoiceField(choices=['all', 'today', 'yesterday', 'days_ago', 'custom'], required=False)
    days = serializers.IntegerField(min_value=0, max_value=3650, required=False)
    start = serializers.DateField(required=False)
    end = serializers.DateField(required=False)
    status = serializers.ChoiceField(choices=['all', 'borrowing', 'returned'], required=False)

    def validate(self, attrs):
        if attrs.get('date') == 'days_ago' and attrs.get('days') is None:
            raise serializers.ValidationError({'days': 'Cần số ngày cho bộ lọc days_ago'})
        if attrs.get('start') and attrs.get('end') and attrs['start'] > attrs['end']:
            raise serializers.ValidationError({'end': 'Ngày kết thúc phải sau ngày bắt đầu'})
        return attrs


class BorrowSerializer(serializers.Serializer):
    so_the = serializers.CharField(max_length=50)
    ho_ten_benh_nhan = serializers.CharField(max_length=255)
    nam_sinh = serializers.CharField(max_length=10, required=False, allow_blank=True)
    ho_ten_nguoi_cham = serializers.CharField(max_length=255, required=False, allow_blank=True)
    sdt_nguoi_cham = serializers.CharField(max_length=50, required=False, allow_blank=True)
    so_tien_cuoc = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    ngay_muon = serializers.DateTimeField(required=False, allow_null=True)
    nguoi_cho_muon = serializers.CharField(max_length=255, required=False, allow_blank=True)
    trang_thai_tien_muon = serializers.ChoiceField(choices=HANDOVER, required=False)
    nguoi_ban_giao_tien_muon = serializers.CharField(max_length=255, required=False, allow_blank=True)
    ngay_ban_giao_tien_muon = serializers.DateTimeField(required=False, allow_null=True)
    ghi_chu = serializers.CharField(required=False, allow_blank=True)

    def validate_ho_ten_benh_nhan(self, v):
        v = _clean_text(v)
        if not v:
            raise serializers.ValidationError('Họ tên bệnh nhân là bắt buộc')
        return v

    def validate_ghi_chu(self, v):
        return _clean_text(v)


class ReturnSerializer(serializers.Serializer):
    ngay_tra = serializers.DateTimeField(required=False, allow_null=True)
    nguoi_nhan_lai_the = serializers.CharField(max_length=255, required=False, allow_blank=True)
    trang_thai_tien_tra = serializers.ChoiceField(choices=HANDOVER, required=False)
    nguoi_ban_giao_tien_tra = serializers.CharField(max_length=255, required=False, allow_blank=True)
    ngay_ban_giao_tien_tra = serializers.DateTimeField(required=False, allow_null=True)
    ghi_chu = serializers.CharField(required=False, allow_blank=True)

    def validate_ghi_chu(self, v):
        return _clean_text(v)


class HandoverBatchSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.IntegerField(min_value=1), allow_empty=False)
    type = serializers.ChoiceField(choices=['borrow', 'return'])
    trang_thai = serializers.ChoiceField(choices=HANDOVER, required=False, default='Đã bàn giao')
    nguoi_ban_giao = serializers.CharField(max_length=255)
    ngay_ban_giao = serializers.DateTimeField(required=False, allow_null=True)


class CardStatusBatchSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.IntegerField(min_value=1), allow_empty=False)
    trang_thai = serializers.ChoiceField(choices=['Đã trả thẻ', 'Đang mượn thẻ chăm', 'Mất thẻ'])


class CardRecordUpdateSerializer(serializers.Serializer):
    """Edit form for one lending record; only the keys sent are applied."""
    so_the = serializers.CharField(max_length=50, required=False)
    ho_ten_benh_nhan = serializers.CharField(max_length=255, required=False)
    nam_sinh = serializers.CharField(max_length=10, required=False, allow_blank=True, allow_null=True)
    ho_ten_nguoi_cham = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    sdt_nguoi_cham = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)
    so_tien_cuoc = serializers.IntegerField(min_value=0, required=False)
    ngay_muon = serializers.DateTimeField(required=False)
    nguoi_cho_muon = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    trang_thai = serializers.ChoiceField(choices=['Đang mượn thẻ', 'Đã trả thẻ'], required=False)
    trang_thai_tien_muon = serializers.ChoiceField(choices=HANDOVER, required=False)
    nguoi_ban_giao_tien_muon = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    ngay_ban_giao_tien_muon = serializers.DateTimeField(required=False, allow_null=True)
    ngay_tra = serializers.DateTimeField(required=False, allow_null=True)
    nguoi_nhan_lai_the = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    trang_thai_tien_tra = serializers.ChoiceField(choices=HANDOVER, required=False, allow_null=True)
    nguoi_ban_giao_tien_tra = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    ngay_ban_giao_tien_tra = serializers.DateTimeField(required=False, allow_null=True)
    ghi_chu = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate_so_the(self, v):
        v = v.strip()
        if not v:
            raise serializers.ValidationError('Số thẻ là bắt buộc')
        return v

    def validate_ho_ten_benh_nhan(self, v):
        v = _clean_text(v)
        if not v:
            raise serializers.ValidationError('Họ tên bệnh nhân là bắt buộc')
        return v

    def validate_ghi_chu(self, v):
        return _clean_text(v)
