# apps/analytics/urls.py

from django.urls import path

from . import views

app_name = 'analytics'

urlpatterns = [
    path('warden/', views.warden_dashboard, name='warden_dashboard'),
    path('admin/', views.admin_dashboard, name='admin_dashboard'),
]
