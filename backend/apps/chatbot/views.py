import logging

from django.http import StreamingHttpResponse
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from apps.accounts.entitlements import check_and_increment
from core.clients.billing_client import is_user_subscribed
from core.clients.completion_client import CompletionError, open_completion_stream, relay_stream
from .graph.workflow import prepare_chat_completion
from .serializers import ChatRequestSerializer

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Ai atins limita de mesaje gratuite pentru azi. Abonează-te pentru mesaje nelimitate!"

COMPLETION_ERRORS = {
    CompletionError.RATE_LIMITED: (
        status.HTTP_429_TOO_MANY_REQUESTS, "Prea multe cereri. Te rugăm încearcă din nou."
    ),
    CompletionError.QUOTA_EXCEEDED: (
        status.HTTP_402_PAYMENT_REQUIRED, "Credite insuficiente."
    ),
}


def completion_error_response(error: CompletionError) -> Response:
    status_code, message = COMPLETION_ERRORS.get(
        error.kind,
        (status.HTTP_500_INTERNAL_SERVER_ERROR, "Eroare la conectarea cu asistentul AI")
    )
    return Response({"error": message}, status=status_code)


@api_view(['POST'])
@permission_classes([AllowAny])
def chat(request):
    """
    Streaming product discovery chat.

    POST /api/chat/
    {
        "messages": [{"role": "user", "content": "Caut miere"}, ...]
    }

    Authenticated non-subscribers are limited to a daily number of free
    messages. The completion stream is relayed as text/event-stream.
    """
    serializer = ChatRequestSerializer(data=request.data)

    if not serializer.is_valid():
        return Response({
            "error": "Cerere invalidă",
            "errors": serializer.errors
        }, status=status.HTTP_400_BAD_REQUEST)

    messages = serializer.validated_data['messages']
    user = request.user

    try:
        if user and user.is_authenticated:
            subscribed = is_user_subscribed(getattr(user, 'email', None))
            decision = check_and_increment(user.id, subscribed)
            if not decision.allowed:
                logger.info(f"User {user.id} reached the daily message limit")
                return Response({
                    "error": RATE_LIMIT_MESSAGE,
                    "rateLimited": True,
                    "messagesUsed": decision.count,
                    "remaining": 0
                }, status=status.HTTP_429_TOO_MANY_REQUESTS)

        completion_messages = prepare_chat_completion(messages)
        upstream = open_completion_stream(completion_messages)
    except CompletionError as e:
        logger.error(f"Completion failed ({e.kind}): {e.detail[:200]}")
        return completion_error_response(e)
    except Exception as e:
        logger.error(f"Chat error: {str(e)}")
        return Response({
            "error": "Eroare la conectarea cu asistentul AI"
        }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    # Closing the response on client disconnect closes the generator, which closes upstream
    response = StreamingHttpResponse(relay_stream(upstream), content_type='text/event-stream')
    response['Cache-Control'] = 'no-cache'
    response['X-Accel-Buffering'] = 'no'

    return response
