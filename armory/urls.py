"""
Armory URLs.

Usage in the project URLconf:
    path('api/', include('armory.urls')),
"""

from django.urls import path

from armory import views

app_name = 'armory'

urlpatterns = [
    path('dashboard/', views.dashboard, name='dashboard'),
    path('purchases/', views.purchases, name='purchases'),
    path('transfers/', views.transfers, name='transfers'),
    path('assignments/', views.assignments, name='assignments'),
    path('logs/', views.logs, name='logs'),
]
