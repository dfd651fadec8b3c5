from django.urls import path

from . import views

urlpatterns = [
    path('', views.import_financials, name='import_financials'),
]
