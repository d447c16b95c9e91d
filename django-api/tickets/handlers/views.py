"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from decimal import Decimal

from django.conf import settings
from django.core.cache import cache
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from tickets.cache_keys import PROGRAM_LIST_CACHE_KEY, program_cache_key, vouchers_cache_key
from tickets.dependencies import get_program_service, is_feature_excluded
from tickets.domain import PaymentMethod, PurchaseDraft
from tickets.domain.errors import DomainError, ErrorCode
from tickets.handlers.serializers import (
    ProgramSerializer,
    PurchaseDraftSerializer,
    QuoteRequestSerializer,
    QuoteSerializer,
    VoucherSerializer,
)
from tickets.services.purchase_service import (
    TRAINING_FUND_FEATURE,
    VOUCHERS_FEATURE,
    quote_purchase,
)
from tickets.stores import SessionDraftStore, program_purchase_key

NOT_FOUND_CODES = {ErrorCode.PROGRAM_NOT_FOUND, ErrorCode.ORGANIZATION_NOT_FOUND}


def error_response(error: DomainError) -> Response:
    code = status.HTTP_404_NOT_FOUND if error.code in NOT_FOUND_CODES else status.HTTP_400_BAD_REQUEST
    return Response({"code": error.code.value, "message": error.message}, status=code)


class ProgramListView(APIView):
    """Handler for GET /api/programs"""

    def get(self, request: Request) -> Response:
        data = cache.get(PROGRAM_LIST_CACHE_KEY)
        if data is None:
            programs = get_program_service().list_programs()
            data = ProgramSerializer(programs, many=True).data
            cache.set(PROGRAM_LIST_CACHE_KEY, data, settings.PORTAL_CACHE_TIMEOUT)
        return Response({"results": data})


class ProgramDetailView(APIView):
    """Handler for GET /api/programs/{program_id}"""

    def get(self, request: Request, program_id: str) -> Response:
        key = program_cache_key(program_id)
        data = cache.get(key)
        if data is None:
            try:
                program = get_program_service().get_program(program_id)
            except DomainError as exc:
                return error_response(exc)
            data = ProgramSerializer(program).data
            cache.set(key, data, settings.PORTAL_CACHE_TIMEOUT)
        return Response(data)


class ProgramQuoteView(APIView):
    """Handler for POST /api/programs/{program_id}/quote

    Prices the request and saves it as the visitor's purchase draft.
    """

    def post(self, request: Request, program_id: str) -> Response:
        payload = QuoteRequestSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        body = payload.validated_data

        service = get_program_service()
        vouchers_enabled = not is_feature_excluded(VOUCHERS_FEATURE)
        training_fund_enabled = not is_feature_excluded(TRAINING_FUND_FEATURE)
        try:
            program = service.get_program(program_id)
            vouchers = []
            fund_balance = Decimal("0")
            if body["organizationId"]:
                organization = service.get_organization(body["organizationId"])
                fund_balance = organization.training_fund_balance.amount
                if vouchers_enabled:
                    vouchers = service.list_vouchers(organization)
        except DomainError as exc:
            return error_response(exc)

        quote = quote_purchase(
            program,
            body["quantity"],
            selected_voucher_ids=body["selectedVoucherIds"],
            vouchers=vouchers,
            training_fund=body["trainingFund"],
            fund_balance=fund_balance,
            vouchers_enabled=vouchers_enabled,
            training_fund_enabled=training_fund_enabled,
        )

        draft = PurchaseDraft(
            selected_vouchers=tuple(body["selectedVoucherIds"]),
            training_fund=quote.allocation.training_fund_amount,
            payment_method=PaymentMethod.parse(body["paymentMethod"]),
            po=body["po"],
            qty=body["quantity"],
        )
        SessionDraftStore(request.session).set(program_purchase_key(program.id), draft.to_dict())
        return Response(QuoteSerializer(quote).data)


class PurchaseDraftView(APIView):
    """Handler for GET/DELETE /api/programs/{program_id}/draft"""

    def get(self, request: Request, program_id: str) -> Response:
        saved = SessionDraftStore(request.session).get(program_purchase_key(program_id))
        draft = PurchaseDraft.from_dict(saved) if saved is not None else PurchaseDraft()
        return Response(PurchaseDraftSerializer(draft).data)

    def delete(self, request: Request, program_id: str) -> Response:
        SessionDraftStore(request.session).clear(program_purchase_key(program_id))
        return Response(status=status.HTTP_204_NO_CONTENT)


class OrganizationVoucherListView(APIView):
    """Handler for GET /api/organizations/{organization_id}/vouchers"""

    def get(self, request: Request, organization_id: str) -> Response:
        if is_feature_excluded(VOUCHERS_FEATURE):
            return Response({"results": []})
        key = vouchers_cache_key(organization_id)
        data = cache.get(key)
        if data is None:
            service = get_program_service()
            try:
                organization = service.get_organization(organization_id)
            except DomainError as exc:
                return error_response(exc)
            data = VoucherSerializer(service.list_vouchers(organization), many=True).data
            cache.set(key, data, settings.PORTAL_CACHE_TIMEOUT)
        return Response({"results": data})
