"""
URL configuration for the daraja app.
"""

from django.urls import path
from . import views

app_name = 'daraja'

urlpatterns = [
    path('callback/stk/', views.stk_callback, name='stk_callback'),
    path('callback/result/', views.result_callback, name='result_callback'),
    path('callback/timeout/', views.timeout_callback, name='timeout_callback'),
]
