import django.contrib.auth.models
import django.contrib.auth.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('auth', '0012_alter_user_first_name_max_length'),
    ]

    operations = [
        migrations.CreateModel(
            name='Employee',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('ho_va_ten', models.CharField(max_length=255)),
                ('ngay_sinh', models.DateField(blank=True, null=True)),
                ('gioi_tinh', models.CharField(blank=True, max_length=20, null=True)),
                ('cap_bac', models.CharField(blank=True, max_length=100, null=True)),
                ('chuc_vu', models.CharField(blank=True, max_length=255, null=True)),
                ('cccd', models.CharField(blank=True, max_length=50, null=True)),
                ('ngay_cap_cccd', models.DateField(blank=True, null=True)),
                ('cmqd', models.CharField(blank=True, max_length=50, null=True)),
                ('ngay_cap_cmqd', models.DateField(blank=True, null=True)),
                ('que_quan', models.CharField(blank=True, max_length=255, null=True)),
                ('noi_o_hien_nay', models.CharField(blank=True, max_length=255, null=True)),
                ('dien_thoai', models.CharField(blank=True, max_length=50, null=True)),
                ('thang_nam_tuyen_dung', models.DateField(blank=True, null=True)),
                ('thang_nam_nhap_ngu', models.DateField(blank=True, null=True)),
                ('ngay_ve_khoa_cong_tac', models.DateField(blank=True, null=True)),
                ('trang_thai', models.CharField(blank=True, db_index=True, max_length=100, null=True)),
                ('thang_nam_roi_khoa', models.DateField(blank=True, null=True)),
                ('trang_thai_roi_khoa', models.CharField(blank=True, max_length=100, null=True)),
                ('noi_den', models.CharField(blank=True, max_length=255, null=True)),
                ('avatar', models.CharField(blank=True, max_length=512, null=True)),
                ('ghi_chu', models.TextField(blank=True, null=True)),
                ('dien_quan_ly', models.CharField(blank=True, max_length=100, null=True)),
                ('ngay_vao_dang', models.DateField(blank=True, null=True)),
                ('ngay_chinh_thuc', models.DateField(blank=True, null=True)),
                ('so_the_dang', models.CharField(blank=True, max_length=50, null=True)),
                ('ngay_cap_the_dang', models.DateField(blank=True, null=True)),
                ('noi_cap_the_dang', models.CharField(blank=True, max_length=255, null=True)),
                ('anh_the_dang', models.CharField(blank=True, max_length=512, null=True)),
                ('doi_tuong', models.CharField(blank=True, db_index=True, max_length=100, null=True)),
                ('danh_hieu', models.CharField(blank=True, max_length=255, null=True)),
                ('chung_chi_hanh_nghe', models.CharField(blank=True, max_length=255, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'dsnv',
                'ordering': ['ho_va_ten'],
            },
        ),
        migrations.CreateModel(
            name='User',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('password', models.CharField(max_length=128, verbose_name='password')),
                ('last_login', models.DateTimeField(blank=True, null=True, verbose_name='last login')),
                ('is_superuser', models.BooleanField(default=False, help_text='Designates that this user has all permissions without explicitly assigning them.', verbose_name='superuser status')),
                ('username', models.CharField(error_messages={'unique': 'A user with that username already exists.'}, help_text='Required. 150 characters or fewer. Letters, digits and @/./+/-/_ only.', max_length=150, unique=True, validators=[django.contrib.auth.validators.UnicodeUsernameValidator()], verbose_name='username')),
                ('first_name', models.CharField(blank=True, max_length=150, verbose_name='first name')),
                ('last_name', models.CharField(blank=True, max_length=150, verbose_name='last name')),
                ('email', models.EmailField(blank=True, max_length=254, verbose_name='email address')),
                ('is_staff', models.BooleanField(default=False, help_text='Designates whether the user can log into this admin site.', verbose_name='staff status')),
                ('is_active', models.BooleanField(default=True, help_text='Designates whether this user should be treated as active. Unselect this instead of deleting accounts.', verbose_name='active')),
                ('date_joined', models.DateTimeField(default=django.utils.timezone.now, verbose_name='date joined')),
                ('full_name', models.CharField(blank=True, max_length=255)),
                ('role', models.CharField(choices=[('user', 'User'), ('manager', 'Manager'), ('admin', 'Administrator')], db_index=True, default='user', max_length=10)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('employee', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='accounts', to='ward.employee')),
                ('groups', models.ManyToManyField(blank=True, help_text='The groups this user belongs to. A user will get all permissions granted to each of their groups.', related_name='user_set', related_query_name='user', to='auth.group', verbose_name='groups')),
                ('user_permissions', models.ManyToManyField(blank=True, help_text='Specific permissions for this user.', related_name='user_set', related_query_name='user', to='auth.permission', verbose_name='user permissions')),
            ],
            options={
                'db_table': 'users',
            },
            managers=[
                ('objects', django.contrib.auth.models.UserManager()),
            ],
        ),
        migrations.CreateModel(
            name='FamilyMember',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('moi_quan_he', models.CharField(max_length=100)),
                ('ho_va_ten', models.CharField(max_length=255)),
                ('nam_sinh', models.IntegerField(blank=True, null=True)),
                ('nghe_nghiep', models.CharField(blank=True, max_length=255, null=True)),
                ('so_dien_thoai', models.CharField(blank=True, max_length=50, null=True)),
                ('ghi_chu', models.TextField(blank=True, null=True)),
                ('dsnv', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='family', to='ward.employee')),
            ],
            options={
                'db_table': 'gia_dinh',
            },
        ),
        migrations.CreateModel(
            name='WorkHistory',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('tu_thang_nam', models.CharField(blank=True, max_length=20, null=True)),
                ('den_thang_nam', models.CharField(blank=True, max_length=20, null=True)),
                ('don_vi_cong_tac', models.CharField(blank=True, max_length=255, null=True)),
                ('cap_bac', models.CharField(blank=True, max_length=100, null=True)),
                ('chuc_vu', models.CharField(blank=True, max_length=255, null=True)),
                ('ghi_chu', models.TextField(blank=True, null=True)),
                ('dsnv', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='work_history', to='ward.employee')),
            ],
            options={
                'db_table': 'qua_trinh_cong_tac',
            },
        ),
        migrations.CreateModel(
            name='Training',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('tu_thang_nam', models.CharField(blank=True, max_length=20, null=True)),
                ('den_thang_nam', models.CharField(blank=True, max_length=20, null=True)),
                ('ten_co_so_dao_tao', models.CharField(blank=True, max_length=255, null=True)),
                ('nganh_dao_tao', models.CharField(blank=True, max_length=255, null=True)),
                ('trinh_do_dao_tao', models.CharField(blank=True, max_length=100, null=True)),
                ('hinh_thuc_dao_tao', models.CharField(blank=True, max_length=100, null=True)),
                ('van_bang_chung_chi', models.CharField(blank=True, max_length=255, null=True)),
                ('xep_loai_tot_nghiep', models.CharField(blank=True, max_length=100, null=True)),
                ('ghi_chu', models.TextField(blank=True, null=True)),
                ('dsnv', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='training', to='ward.employee')),
            ],
            options={
                'db_table': 'qua_trinh_dao_tao',
            },
        ),
        migrations.CreateModel(
            name='Salary',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('thang_nam_nhan', models.CharField(blank=True, max_length=20, null=True)),
                ('loai_nhom', models.CharField(blank=True, max_length=100, null=True)),
                ('bac', models.CharField(blank=True, max_length=50, null=True)),
                ('he_so', models.FloatField(blank=True, null=True)),
                ('phan_tram_tnvk', models.FloatField(blank=True, null=True)),
                ('hsbl', models.FloatField(blank=True, null=True)),
                ('quan_ham', models.CharField(blank=True, max_length=100, null=True)),
                ('hinh_thuc', models.CharField(blank=True, max_length=100, null=True)),
                ('file_qd', models.CharField(blank=True, max_length=512, null=True)),
                ('ghi_chu', models.TextField(blank=True, null=True)),
                ('dsnv', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='salary', to='ward.employee')),
            ],
            options={
                'db_table': 'len_luong',
            },
        ),
        migrations.CreateModel(
            name='LeaveRecord',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('ho_va_ten', models.CharField(blank=True, max_length=255, null=True)),
                ('cap_bac', models.CharField(blank=True, max_length=100, null=True)),
                ('chuc_vu', models.CharField(blank=True, max_length=255, null=True)),
                ('loai_nghi', models.CharField(blank=True, max_length=100, null=True)),
                ('tu_ngay', models.DateField(blank=True, db_index=True, null=True)),
                ('den_ngay', models.DateField(blank=True, db_index=True, null=True)),
                ('ly_do_nghi', models.TextField(blank=True, null=True)),
                ('noi_dang_ky_nghi', models.CharField(blank=True, max_length=255, null=True)),
                ('ghi_chu', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='leaves_created', to=settings.AUTH_USER_MODEL)),
                ('dsnv', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='leaves', to='ward.employee')),
            ],
            options={
                'db_table': 'quan_ly_phep',
            },
        ),
        migrations.CreateModel(
            name='Schedule',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('noi_dung', models.CharField(max_length=500)),
                ('chi_tiet', models.TextField(blank=True, default='')),
                ('ngay_bat_dau', models.DateTimeField(db_index=True)),
                ('ngay_ket_thuc', models.DateTimeField(db_index=True)),
                ('nguoi_thuc_hien', models.JSONField(blank=True, default=list)),
                ('file_dinh_kem', models.CharField(blank=True, max_length=512, null=True)),
                ('trang_thai', models.CharField(choices=[('Đang thực hiện', 'Đang thực hiện'), ('Hoàn thành', 'Hoàn thành')], default='Đang thực hiện', max_length=30)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'lich_cong_tac',
            },
        ),
        migrations.CreateModel(
            name='Card',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('so_the', models.CharField(max_length=50, unique=True)),
                ('trang_thai', models.CharField(choices=[('Đã trả thẻ', 'Đã trả thẻ'), ('Đang mượn thẻ chăm', 'Đang mượn thẻ chăm'), ('Mất thẻ', 'Mất thẻ')], default='Đã trả thẻ', max_length=30)),
                ('ghi_chu', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'dm_the_cham',
                'ordering': ['so_the'],
            },
        ),
        migrations.CreateModel(
            name='CardRecord',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('so_the', models.CharField(db_index=True, max_length=50)),
                ('ho_ten_benh_nhan', models.CharField(max_length=255)),
                ('nam_sinh', models.CharField(blank=True, default='', max_length=10)),
                ('ho_ten_nguoi_cham', models.CharField(blank=True, default='', max_length=255)),
                ('sdt_nguoi_cham', models.CharField(blank=True, default='', max_length=50)),
                ('so_tien_cuoc', models.PositiveIntegerField(default=500000)),
                ('ngay_muon', models.DateTimeField(db_index=True)),
                ('nguoi_cho_muon', models.CharField(blank=True, default='', max_length=255)),
                ('trang_thai', models.CharField(choices=[('Đang mượn thẻ', 'Đang mượn thẻ'), ('Đã trả thẻ', 'Đã trả thẻ')], db_index=True, default='Đang mượn thẻ', max_length=30)),
                ('trang_thai_tien_muon', models.CharField(choices=[('Chưa bàn giao', 'Chưa bàn giao'), ('Đã bàn giao', 'Đã bàn giao')], default='Chưa bàn giao', max_length=30)),
                ('nguoi_ban_giao_tien_muon', models.CharField(blank=True, max_length=255, null=True)),
                ('ngay_ban_giao_tien_muon', models.DateTimeField(blank=True, null=True)),
                ('ngay_tra', models.DateTimeField(blank=True, null=True)),
                ('nguoi_nhan_lai_the', models.CharField(blank=True, max_length=255, null=True)),
                ('trang_thai_tien_tra', models.CharField(blank=True, choices=[('Chưa bàn giao', 'Chưa bàn giao'), ('Đã bàn giao', 'Đã bàn giao')], max_length=30, null=True)),
                ('nguoi_ban_giao_tien_tra', models.CharField(blank=True, max_length=255, null=True)),
                ('ngay_ban_giao_tien_tra', models.DateTimeField(blank=True, null=True)),
                ('ghi_chu', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'quan_ly_the_cham',
                'indexes': [models.Index(fields=['trang_thai', 'ngay_muon'], name='quan_ly_the_trang_t_6f1c2a_idx')],
            },
        ),
        migrations.CreateModel(
            name='ResearchTopic',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('ten_de_tai', models.CharField(max_length=500)),
                ('vai_tro', models.CharField(blank=True, default='', max_length=100)),
                ('cap_quan_ly', models.CharField(blank=True, default='', max_length=100)),
                ('trang_thai', models.CharField(choices=[('Đang thực hiện', 'Đang thực hiện'), ('Đã nghiệm thu', 'Đã nghiệm thu')], default='Đang thực hiện', max_length=30)),
                ('ngay_bat_dau', models.DateField(blank=True, null=True)),
                ('ngay_ket_thuc', models.DateField(blank=True, null=True)),
                ('ket_qua', models.TextField(blank=True, default='')),
                ('minh_chung', models.JSONField(blank=True, default=list)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='research_created', to=settings.AUTH_USER_MODEL)),
                ('dsnv', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='research_topics', to='ward.employee')),
            ],
            options={
                'db_table': 'nckh',
            },
        ),
        migrations.CreateModel(
            name='ModulePermission',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('role', models.CharField(choices=[('user', 'User'), ('manager', 'Manager'), ('admin', 'Administrator')], max_length=10)),
                ('module', models.CharField(max_length=64)),
                ('can_view', models.BooleanField(default=False)),
                ('can_add', models.BooleanField(default=False)),
                ('can_edit', models.BooleanField(default=False)),
                ('can_delete', models.BooleanField(default=False)),
            ],
            options={
                'db_table': 'permissions',
                'ordering': ['module', 'role'],
                'unique_together': {('role', 'module')},
            },
        ),
        migrations.CreateModel(
            name='SystemSetting',
            fields=[
                ('key', models.CharField(max_length=100, primary_key=True, serialize=False)),
                ('value', models.TextField(blank=True, default='')),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'system_settings',
            },
        ),
        migrations.CreateModel(
            name='AuditEvent',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('action', models.CharField(max_length=64)),
                ('object_type', models.CharField(blank=True, max_length=64, null=True)),
                ('object_id', models.CharField(blank=True, max_length=64, null=True)),
                ('detail', models.JSONField(blank=True, default=dict)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'indexes': [
                    models.Index(fields=['action', 'created_at'], name='ward_audite_action_3b9e1f_idx'),
                    models.Index(fields=['object_type', 'object_id', 'created_at'], name='ward_audite_object__8c4d27_idx'),
                ],
            },
        ),
    ]
