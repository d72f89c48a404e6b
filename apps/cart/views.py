from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import IsTeam
from apps.purchases.serializers import BatchSerializer
from apps.purchases.services import (
    get_batch,
    validate_add_to_cart,
    PurchasesServiceError,
)
from apps.resources.services import get_resource, ResourceNotFoundError

from .serializers import (
    AddCartItemSerializer,
    UpdateCartItemSerializer,
    ValidateCartItemSerializer,
    CheckoutSerializer,
    CartSerializer,
    CartValidationResultSerializer,
)
from .services import (
    get_cart,
    add_item,
    update_quantity,
    remove_item,
    clear_cart,
    cart_total_cost,
    cart_items_count,
    checkout,
    # Exceptions
    CartValidationError,
    CartItemNotFoundError,
    EmptyCartError,
)


def _cart_response(team, code=status.HTTP_200_OK):
    data = CartSerializer({
        'items': get_cart(team=team),
        'total_cost': cart_total_cost(team=team),
        'items_count': cart_items_count(team=team),
    }).data
    return Response(data, status=code)


def _validation_failed(error):
    body = {'error': str(error)}
    if error.max_quantity_allowed is not None:
        body['max_quantity_allowed'] = error.max_quantity_allowed
    return Response(body, status=status.HTTP_400_BAD_REQUEST)


@extend_schema(methods=['GET'], responses={200: CartSerializer}, tags=['team'])
@extend_schema(methods=['DELETE'], responses={204: None}, tags=['team'])
@api_view(['GET', 'DELETE'])
@permission_classes([IsAuthenticated, IsTeam])
def cart(request):
    """Get or empty the team's cart."""
    if request.method == 'DELETE':
        clear_cart(team=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    return _cart_response(request.user)


@extend_schema(request=AddCartItemSerializer, responses={201: CartSerializer}, tags=['team'])
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsTeam])
def cart_items(request):
    """Add units of a resource to the cart."""
    serializer = AddCartItemSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        add_item(team=request.user, **serializer.validated_data)
    except ResourceNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except CartValidationError as e:
        return _validation_failed(e)

    return _cart_response(request.user, status.HTTP_201_CREATED)


@extend_schema(methods=['PATCH'], request=UpdateCartItemSerializer, responses={200: CartSerializer}, tags=['team'])
@extend_schema(methods=['DELETE'], responses={200: CartSerializer}, tags=['team'])
@api_view(['PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsTeam])
def cart_item_detail(request, resource_id):
    """Change or remove one cart line."""
    try:
        if request.method == 'DELETE':
            remove_item(team=request.user, resource_id=resource_id)
        else:
            serializer = UpdateCartItemSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            update_quantity(
                team=request.user,
                resource_id=resource_id,
                quantity=serializer.validated_data['quantity'],
            )
    except CartItemNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except CartValidationError as e:
        return _validation_failed(e)

    return _cart_response(request.user)


@extend_schema(
    request=ValidateCartItemSerializer,
    responses={200: CartValidationResultSerializer},
    description="Check whether a quantity could be added to the cart, without adding it.",
    tags=['team'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsTeam])
def validate_cart_item(request):
    """Dry-run of an addition to the cart."""
    serializer = ValidateCartItemSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        resource = get_resource(resource_id=serializer.validated_data['resource_id'])
    except ResourceNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    result = validate_add_to_cart(
        team=request.user,
        resource=resource,
        quantity=serializer.validated_data['quantity'],
    )
    return Response(CartValidationResultSerializer(result).data)


@extend_schema(request=CheckoutSerializer, responses={201: BatchSerializer}, tags=['team'])
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsTeam])
def cart_checkout(request):
    """Submit the cart as one batch purchase."""
    serializer = CheckoutSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        purchases = checkout(team=request.user, comment=serializer.validated_data['comment'])
    except ResourceNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except (EmptyCartError, PurchasesServiceError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    batch = get_batch(batch_id=purchases[0].batch_id)
    return Response(BatchSerializer(batch).data, status=status.HTTP_201_CREATED)
