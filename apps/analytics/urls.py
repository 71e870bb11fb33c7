from django.urls import path
from . import views

app_name = 'analytics'

urlpatterns = [
    # Revenue reports
    path('revenue/daily/', views.daily_revenue, name='daily-revenue'),
    path('revenue/summary/', views.revenue_summary, name='revenue-summary'),
    path('revenue/peak-hours/', views.peak_hours, name='peak-hours'),
    path('revenue/top-items/', views.top_items, name='top-items'),
    path('revenue/timeseries/', views.revenue_timeseries, name='revenue-timeseries'),
]
