from tickets.gateway.functions import (
    FunctionCallError,
    FunctionsGateway,
    HttpFunctionsGateway,
    PurchaseRequest,
)

__all__ = ["FunctionCallError", "FunctionsGateway", "HttpFunctionsGateway", "PurchaseRequest"]
