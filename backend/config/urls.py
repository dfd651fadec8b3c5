"""URL configuration for the LocalAgent backend."""
from django.urls import path, include
from django.http import JsonResponse


def health_check(request):
    """Health check endpoint for container orchestration."""
    return JsonResponse({'status': 'healthy'})


urlpatterns = [
    path('api/health/', health_check, name='health_check'),
    path('api/chat/', include('apps.chatbot.urls')),
    path('api/import/', include('apps.companies.urls')),
    path('api/account/', include('apps.accounts.urls')),
    path('api/wishlist/', include('apps.wishlist.urls')),
]
