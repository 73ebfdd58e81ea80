from fastapi import Request

from smartqr.core.bootstrap.application import ApplicationBootstrap, ServiceContainer
from smartqr.domains.banking.services import BankDeeplinkService, BankDirectory
from smartqr.domains.qr_generation.services import QROrchestrator


def get_bootstrap(request: Request) -> ApplicationBootstrap:
    return request.app.state.bootstrap


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


def get_orchestrator(request: Request) -> QROrchestrator:
    return get_container(request).orchestrator


def get_bank_directory(request: Request) -> BankDirectory:
    return get_container(request).bank_directory


def get_deeplink_service(request: Request) -> BankDeeplinkService:
    return get_container(request).deeplink_service
