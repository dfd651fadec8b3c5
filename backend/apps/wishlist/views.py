import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .serializers import WishlistAddSerializer, WishlistItemSerializer
from .services import add_to_wishlist, list_wishlist, remove_from_wishlist

logger = logging.getLogger(__name__)


@api_view(['GET', 'POST', 'DELETE'])
@permission_classes([IsAuthenticated])
def wishlist(request):
    """
    GET    /api/wishlist/            list saved products, newest first
    POST   /api/wishlist/            {"url", "title"?, "price"?, "image"?}
    DELETE /api/wishlist/?url=...    remove a saved product
    """
    user_id = request.user.id

    try:
        if request.method == 'GET':
            items = list_wishlist(user_id)
            return Response({
                "success": True,
                "items": WishlistItemSerializer(items, many=True).data
            })

        if request.method == 'POST':
            serializer = WishlistAddSerializer(data=request.data)
            if not serializer.is_valid():
                return Response({
                    "success": False,
                    "errors": serializer.errors
                }, status=status.HTTP_400_BAD_REQUEST)

            data = serializer.validated_data
            result = add_to_wishlist(
                user_id,
                data['url'],
                title=data.get('title'),
                price=data.get('price'),
                image=data.get('image')
            )
            if not result.created:
                return Response({
                    "success": False,
                    "alreadyPresent": True,
                    "message": "Acest produs este deja în wishlist-ul tău",
                    "item": WishlistItemSerializer(result.item).data
                })

            return Response({
                "success": True,
                "message": "Produsul a fost adăugat în wishlist",
                "item": WishlistItemSerializer(result.item).data
            }, status=status.HTTP_201_CREATED)

        url = request.query_params.get('url') or request.data.get('url')
        if not url:
            return Response({
                "success": False,
                "message": "Parametrul url lipsește"
            }, status=status.HTTP_400_BAD_REQUEST)

        deleted = remove_from_wishlist(user_id, url)
        return Response({"success": True, "deleted": deleted})

    except DatabaseError as e:
        logger.error(f"Wishlist error for {user_id}: {str(e)}")
        return Response({
            "success": False,
            "message": "Nu s-a putut actualiza wishlist-ul"
        }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
