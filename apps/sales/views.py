from rest_framework import viewsets, status, mixins
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter
from .models import Sale
from .serializers import (
    SaleSerializer,
    SaleCreateSerializer,
    SaleFilterSerializer,
    SaleRecordedSerializer,
)
from .services import record_sale, get_sale, list_sales


class SalePagination(PageNumberPagination):
    """Custom pagination for sales."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class SaleViewSet(
    mixins.ListModelMixin,
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for sales.

    list: Get sales, newest first (?customer=<id>)
    create: Record a sale and update the customer atomically
    retrieve: Get a specific sale

    Sales are immutable once recorded; there is no update or delete.
    """

    queryset = Sale.objects.all()
    serializer_class = SaleSerializer
    pagination_class = SalePagination
    lookup_value_regex = '[0-9a-fA-F-]{36}'

    def get_queryset(self):
        """Filter sales using input serializer validation."""
        filter_serializer = SaleFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        return list_sales(customer_id=filter_serializer.validated_data.get('customer'))

    def get_serializer_class(self):
        if self.action == 'create':
            return SaleCreateSerializer
        return SaleSerializer

    @extend_schema(
        parameters=[OpenApiParameter('customer', str, description='Customer id')],
        responses={200: SaleSerializer(many=True)},
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(
        request=SaleCreateSerializer,
        parameters=[
            OpenApiParameter(
                'Idempotency-Key',
                str,
                location=OpenApiParameter.HEADER,
                required=False,
                description='Resubmitting with the same key returns the original sale.'
            ),
        ],
        responses={201: SaleRecordedSerializer, 200: SaleRecordedSerializer},
    )
    def create(self, request, *args, **kwargs):
        """
        Record a sale.

        The sale, the customer's embedded history, credit and last purchase
        are written together or not at all.
        """
        serializer = SaleCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        sale, customer, created = record_sale(
            **serializer.validated_data,
            idempotency_key=request.headers.get('Idempotency-Key') or None,
        )

        data = SaleRecordedSerializer({'sale': sale, 'customer': customer}).data
        return Response(
            data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK
        )

    def retrieve(self, request, *args, **kwargs):
        sale = get_sale(sale_id=kwargs.get('pk'))
        return Response(SaleSerializer(sale).data)
