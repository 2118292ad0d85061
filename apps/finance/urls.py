from django.urls import path

from . import views

app_name = 'finance'

urlpatterns = [
    # Additional collections
    path('collection-types/', views.collection_type_list, name='collection_type_list'),
    path('collections/', views.collection_list, name='collection_list'),

    # Mess bills
    path('mess-bills/', views.mess_bill_list, name='mess_bill_list'),
    path('mess-bills/generate/', views.generate_mess_bills, name='generate_mess_bills'),
    path('mess-bills/mine/', views.my_mess_bills, name='my_mess_bills'),
    path('mess-bills/<int:pk>/pay/', views.pay_mess_bill, name='pay_mess_bill'),

    # Mess menu
    path('menus/', views.mess_menu_list, name='mess_menu_list'),
]
