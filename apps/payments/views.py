"""Payment API views."""

from __future__ import annotations

from rest_framework import status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import IsAdminRole, is_admin_user

from .application.command_handlers import (
    RecordPaymentCommand,
    RecordPaymentHandler,
    UpdatePaymentStatusCommand,
    UpdatePaymentStatusHandler,
)
from .models import Payment
from .serializers import PaymentCreateSerializer, PaymentSerializer, PaymentStatusSerializer


class PaymentViewSet(viewsets.ModelViewSet):
    serializer_class = PaymentSerializer
    http_method_names = ["get", "post", "put", "head", "options"]
    lookup_value_regex = r"\d+"
    filterset_fields = ["status", "payment_method"]

    def get_queryset(self):  # type: ignore
        qs = Payment.objects.select_related("reservation__customer", "reservation__vehicle").order_by(
            "-payment_date"
        )
        user = self.request.user
        if is_admin_user(user):
            return qs
        return qs.filter(reservation__customer=user)

    def get_permissions(self):  # type: ignore
        if self.action == "update":
            return [IsAdminRole()]
        return super().get_permissions()

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = PaymentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        payment = RecordPaymentHandler().handle(
            RecordPaymentCommand(
                reservation_id=data["reservation_id"],
                customer_id=request.user.id,
                is_admin=is_admin_user(request.user),
                amount=data["amount"],
                payment_method=data["payment_method"],
                payment_date=data["payment_date"],
                txn_ref=data.get("txn_ref"),
                status=data["status"],
            )
        )
        return Response(PaymentSerializer(self.get_queryset().get(pk=payment.pk)).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):  # type: ignore
        serializer = PaymentStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        payment = UpdatePaymentStatusHandler().handle(
            UpdatePaymentStatusCommand(
                payment_id=int(kwargs["pk"]),
                status=serializer.validated_data["status"],
                changed_by=request.user.id,
            )
        )
        return Response(PaymentSerializer(self.get_queryset().get(pk=payment.pk)).data)

    @action(detail=False, methods=["get"])
    def history(self, request):  # type: ignore
        """The caller's own payments, newest first."""
        qs = self.get_queryset().filter(reservation__customer=request.user)
        return Response(PaymentSerializer(qs, many=True).data)
