from rest_framework import viewsets, status, mixins
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from .models import Customer
from .serializers import (
    CustomerSerializer,
    CustomerListSerializer,
    CustomerCreateSerializer,
    CustomerFilterSerializer,
    CreditAdjustmentSerializer,
)
from .services import (
    create_customer,
    get_customer,
    search_customers,
    adjust_credit,
)
from apps.sales.services import rebuild_sales_history


class CustomerViewSet(
    mixins.ListModelMixin,
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for customer accounts.

    list: Get customers (?search=&sort=recent|oldest|credit)
    create: Create a customer with an opening credit
    retrieve: Get a customer with embedded sales history
    adjust_credit: Apply a direct credit adjustment
    rebuild_history: Rebuild embedded history from recorded sales
    """

    queryset = Customer.objects.all()
    serializer_class = CustomerSerializer
    lookup_value_regex = '[0-9a-fA-F-]{36}'

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return CustomerListSerializer
        elif self.action == 'create':
            return CustomerCreateSerializer
        return CustomerSerializer

    @extend_schema(
        parameters=[
            OpenApiParameter('search', str, description='Case-insensitive name search'),
            OpenApiParameter('sort', str, enum=['recent', 'oldest', 'credit']),
        ],
        responses={200: CustomerListSerializer(many=True)},
    )
    def list(self, request, *args, **kwargs):
        """List customers ordered by recency or credit."""
        filter_serializer = CustomerFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        customers = search_customers(
            search=params.get('search') or None,
            sort=params.get('sort') or None,
        )
        return Response(CustomerListSerializer(customers, many=True).data)

    @extend_schema(request=CustomerCreateSerializer, responses={201: CustomerSerializer})
    def create(self, request, *args, **kwargs):
        """Create a new customer."""
        serializer = CustomerCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        customer = create_customer(**serializer.validated_data)

        return Response(
            CustomerSerializer(customer).data,
            status=status.HTTP_201_CREATED
        )

    def retrieve(self, request, *args, **kwargs):
        """Get a customer including embedded sales."""
        customer = get_customer(customer_id=kwargs.get('pk'))
        return Response(CustomerSerializer(customer).data)

    @extend_schema(request=CreditAdjustmentSerializer, responses={200: CustomerSerializer})
    @action(detail=True, methods=['post'])
    def adjust_credit(self, request, pk=None):
        """
        Apply a signed adjustment to the customer's credit.

        POST /api/customers/{id}/adjust_credit/
        Body: {"amount": "-50.00"}
        """
        serializer = CreditAdjustmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        customer = adjust_credit(
            customer_id=pk,
            amount=serializer.validated_data['amount'],
        )
        return Response(CustomerSerializer(customer).data)

    @extend_schema(request=None, responses={200: CustomerSerializer})
    @action(detail=True, methods=['post'])
    def rebuild_history(self, request, pk=None):
        """
        Rebuild the embedded sales history from the recorded sales.

        POST /api/customers/{id}/rebuild_history/
        """
        customer, _ = rebuild_sales_history(customer_id=pk)
        return Response(CustomerSerializer(get_customer(customer_id=customer.id)).data)
