from django.urls import path

from . import views

app_name = 'hostels'

urlpatterns = [
    # Administration
    path('hostels/', views.hostel_list, name='hostel_list'),
    path('room-types/', views.room_type_list, name='room_type_list'),

    # Rooms
    path('rooms/', views.room_list, name='room_list'),
    path('rooms/available/', views.available_rooms, name='available_rooms'),

    # Allotments
    path('allotments/', views.allotment_list, name='allotment_list'),
    path('allotments/<int:pk>/vacate/', views.vacate_allotment, name='vacate_allotment'),
    path('allotments/<int:pk>/transfer/', views.transfer_allotment, name='transfer_allotment'),

    # Holidays
    path('holidays/', views.holiday_list, name='holiday_list'),
    path('holidays/<int:pk>/', views.holiday_update, name='holiday_update'),
    path('holidays/<int:pk>/delete/', views.holiday_delete, name='holiday_delete'),
]
