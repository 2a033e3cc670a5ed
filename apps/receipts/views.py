from drf_spectacular.utils import extend_schema
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .serializers import (
    ReceiptSerializer,
    ReceiptUpdateSerializer,
    MemberSplitSerializer,
    ReceiptWithSplitSerializer,
)

from apps.orders.services import OrderNotFoundError
from apps.receipts.services import (
    get_receipt,
    get_receipt_for_order,
    get_split,
    create_manual_receipt,
    update_receipt,
    # Exceptions
    ReceiptNotFoundError,
    InvalidAdjustmentError,
)


def _with_split(receipt, split):
    return ReceiptWithSplitSerializer({
        'receipt': receipt,
        'split': split.member_splits,
    }).data


class ReceiptViewSet(viewsets.GenericViewSet):
    """
    Receipts and the bill split derived from them.

    The split is recomputed on every request from the order items, the
    receipt fees and its adjustments.
    """

    serializer_class = ReceiptSerializer
    permission_classes = [IsAuthenticated]
    lookup_value_regex = '[0-9a-f-]{36}'

    def retrieve(self, request, pk=None):
        try:
            receipt = get_receipt(receipt_id=pk, user=request.user)
        except ReceiptNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(ReceiptSerializer(receipt).data)

    @extend_schema(
        request=ReceiptUpdateSerializer,
        responses={200: ReceiptWithSplitSerializer},
        description="Set receipt fees and adjustments; returns the receipt and the new split.",
        tags=['receipts'],
    )
    def update(self, request, pk=None):
        serializer = ReceiptUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        overrides = data.get('individual_item_overrides')
        try:
            receipt, split = update_receipt(
                receipt_id=pk,
                user=request.user,
                tax=data['tax'],
                service_fee=data['service_fee'],
                delivery_fee=data['delivery_fee'],
                subtotal=data.get('subtotal'),
                individual_item_overrides=(
                    {str(k): v for k, v in overrides.items()} if overrides is not None else None
                ),
                manual_extra_items=data.get('manual_extra_items'),
            )
        except ReceiptNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidAdjustmentError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(_with_split(receipt, split))

    @extend_schema(
        responses={200: MemberSplitSerializer(many=True)},
        description="Current per-member split for the receipt.",
        tags=['receipts'],
    )
    @action(detail=True, methods=['get'])
    def split(self, request, pk=None):
        try:
            receipt = get_receipt(receipt_id=pk, user=request.user)
        except ReceiptNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(MemberSplitSerializer(get_split(receipt=receipt).member_splits, many=True).data)

    @extend_schema(
        request=None,
        responses={201: ReceiptWithSplitSerializer},
        description="Create or refresh a receipt from the order's items with zero fees.",
        tags=['receipts'],
    )
    @action(detail=True, methods=['post'])
    def manual(self, request, pk=None):
        """``pk`` is the order id here."""
        try:
            receipt, split = create_manual_receipt(order_id=pk, user=request.user)
        except OrderNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(_with_split(receipt, split), status=status.HTTP_201_CREATED)

    @extend_schema(
        responses={200: ReceiptSerializer},
        description="Receipt attached to an order.",
        tags=['receipts'],
    )
    @action(detail=False, methods=['get'], url_path=r'order/(?P<order_id>[0-9a-f-]{36})')
    def by_order(self, request, order_id=None):
        try:
            receipt = get_receipt_for_order(order_id=order_id, user=request.user)
        except (OrderNotFoundError, ReceiptNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(ReceiptSerializer(receipt).data)
