from django.contrib import admin
from django.urls import path, include


urlpatterns = [
    # Admin site
    path('admin/', admin.site.urls),

    # Current user profile
    path('api/auth/', include('apps.users.urls')),

    # Hostels, rooms, allotments and holidays
    path('api/hostels/', include('apps.hostels.urls')),

    # Sessions, enrollment and suspensions
    path('api/academics/', include('apps.academics.urls')),

    # Attendance and leave
    path('api/attendance/', include('apps.attendance.urls')),

    # Complaints
    path('api/support/', include('apps.support.urls')),

    # Mess bills and additional collections
    path('api/finance/', include('apps.finance.urls')),

    # Dashboard statistics
    path('api/analytics/', include('apps.analytics.urls')),
]
