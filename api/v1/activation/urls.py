"""
URL configuration for activation API endpoints.
"""

from django.urls import path

from api.v1.activation import views

app_name = "activation"

urlpatterns = [
    path(
        "",
        views.ActivateDeviceView.as_view(),
        name="activate-device",
    ),
]
