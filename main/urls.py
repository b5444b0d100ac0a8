from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("djangoadmin/", admin.site.urls),
    path("flags/", include("flaglinks.urls")),
]
