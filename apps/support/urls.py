from django.urls import path

from . import views

app_name = 'support'

urlpatterns = [
    path('complaints/', views.complaint_list, name='complaint_list'),
    path('complaints/pending/', views.pending_complaints, name='pending_complaints'),
    path('complaints/mine/', views.my_complaints, name='my_complaints'),
    path('complaints/<int:pk>/', views.complaint_update, name='complaint_update'),
]
