import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Game',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, unique=True)),
                ('icon_name', models.CharField(blank=True, default='', max_length=50)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='JasaCari',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(editable=False, max_length=10, unique=True)),
                ('phone_number', models.CharField(max_length=20, verbose_name='Nomor WhatsApp')),
                ('is_approved', models.BooleanField(db_index=True, default=False, verbose_name='Disetujui')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('requester_name', models.CharField(max_length=100, verbose_name='Nama')),
                ('price_min', models.PositiveIntegerField(verbose_name='Harga Minimal')),
                ('price_max', models.PositiveIntegerField(verbose_name='Harga Maksimal')),
                ('account_spec', models.TextField(verbose_name='Spesifikasi Akun')),
                ('game', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to='marketplace.game')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Jasa Cari',
                'verbose_name_plural': 'Jasa Cari',
                'db_table': 'jasa_cari',
                'ordering': ['-created_at'],
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='JasaPosting',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(editable=False, max_length=10, unique=True)),
                ('phone_number', models.CharField(max_length=20, verbose_name='Nomor WhatsApp')),
                ('is_approved', models.BooleanField(db_index=True, default=False, verbose_name='Disetujui')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('owner_name', models.CharField(max_length=100, verbose_name='Nama Pemilik Akun')),
                ('price', models.PositiveIntegerField(verbose_name='Harga')),
                ('is_safe', models.BooleanField(verbose_name='Data Aman')),
                ('additional_spec', models.TextField(blank=True, null=True, verbose_name='Spesifikasi Tambahan')),
                ('photos', models.JSONField(blank=True, default=list)),
                ('game', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to='marketplace.game')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Jasa Posting',
                'verbose_name_plural': 'Jasa Posting',
                'db_table': 'jasa_posting',
                'ordering': ['-created_at'],
                'abstract': False,
            },
        ),
    ]
