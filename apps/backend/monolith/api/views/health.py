"""
Health check endpoint with Kubernetes-compatible semantics.

The gateway is stateless (no database, no cache), so liveness is all
there is to probe.
"""
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET


@require_GET
@csrf_exempt
def healthz(request):
    """
    Liveness probe endpoint.

    Returns 200 OK if the application process is alive.
    Does NOT call the exchange.
    """
    return JsonResponse({
        'status': 'alive',
        'service': 'spotgate',
    }, status=200)
