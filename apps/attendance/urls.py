from django.urls import path

from . import views

app_name = 'attendance'

urlpatterns = [
    path('records/', views.attendance_records, name='attendance_records'),
    path('leaves/', views.leave_list, name='leave_list'),
    path('leaves/pending/', views.pending_leaves, name='pending_leaves'),
    path('leaves/mine/', views.my_leaves, name='my_leaves'),
    path('leaves/<int:pk>/review/', views.review_leave, name='review_leave'),
]
