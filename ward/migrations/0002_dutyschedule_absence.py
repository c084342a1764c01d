import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('ward', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='DutySchedule',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('ngay_truc', models.DateField(db_index=True)),
                ('bac_sy', models.TextField(blank=True, null=True)),
                ('noi_tru', models.TextField(blank=True, null=True)),
                ('sau_dai_hoc', models.TextField(blank=True, null=True)),
                ('dieu_duong', models.TextField(blank=True, null=True)),
                ('phu_dieu_duong', models.TextField(blank=True, null=True)),
                ('ghi_chu', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='duty_created', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'lich_truc',
                'ordering': ['ngay_truc', 'id'],
            },
        ),
        migrations.CreateModel(
            name='Absence',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('ho_va_ten', models.CharField(max_length=255)),
                ('loai_nghi', models.CharField(default='Nghỉ trực', max_length=100)),
                ('ngay_nghi', models.DateField(db_index=True)),
                ('ghi_chu', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='absences_created', to=settings.AUTH_USER_MODEL)),
                ('dsnv', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='absences', to='ward.employee')),
            ],
            options={
                'db_table': 'quan_so_nghi',
            },
        ),
    ]
