from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .serializers import (
    PaymentSerializer,
    RecordPaymentsSerializer,
    SettlementSerializer,
)

from apps.orders.services import OrderNotFoundError
from apps.payments.services import (
    record_payments,
    list_payments,
    calculate_settlement,
    InvalidPaymentError,
)


@extend_schema(
    methods=['GET'],
    responses={200: PaymentSerializer(many=True)},
    description="Payments recorded for the order.",
    tags=['payments'],
)
@extend_schema(
    methods=['POST'],
    request=RecordPaymentsSerializer,
    responses={201: PaymentSerializer(many=True)},
    description="Replace all payments recorded for the order.",
    tags=['payments'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def order_payments(request, order_id):
    if request.method == 'GET':
        try:
            payments = list_payments(order_id=order_id, user=request.user)
        except OrderNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(PaymentSerializer(payments, many=True).data)

    serializer = RecordPaymentsSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        payments = record_payments(
            order_id=order_id,
            user=request.user,
            payments=serializer.validated_data['payments'],
        )
    except OrderNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except InvalidPaymentError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(PaymentSerializer(payments, many=True).data, status=status.HTTP_201_CREATED)


@extend_schema(
    responses={200: SettlementSerializer},
    description="Balances and the transfers that settle the order.",
    tags=['payments'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def order_settlement(request, order_id):
    try:
        result = calculate_settlement(order_id=order_id, user=request.user)
    except OrderNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    return Response(SettlementSerializer(result).data)
