from django.urls import path

from . import views

app_name = 'academics'

urlpatterns = [
    path('sessions/', views.session_list, name='session_list'),
    path('students/', views.student_list, name='student_list'),
    path('students/<int:pk>/deactivate/', views.student_deactivate, name='student_deactivate'),
    path('suspensions/', views.suspension_list, name='suspension_list'),
    path('suspensions/<int:pk>/', views.suspension_update, name='suspension_update'),
]
