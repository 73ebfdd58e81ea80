"""Shared fixtures: fake VietQR/Gemini clients and a small bank list."""
import asyncio
import base64
import json
from datetime import datetime, timedelta
from io import BytesIO

import pytest
from PIL import Image

from smartqr.core.bootstrap.application import ServiceContainer
from smartqr.core.config.settings import Settings
from smartqr.core.exceptions import UpstreamError
from smartqr.core.infrastructure.cache_service import BankDirectoryCache
from smartqr.domains.banking.services import BankDeeplinkService, BankDirectory
from smartqr.domains.parsing.services import GeminiTextParser
from smartqr.domains.qr_generation.services import AccountNameResolver, QROrchestrator

FALLBACK_NAME = "ACCOUNT HOLDER"


def make_bank(id, name, short_name, code, bin):
    return {
        "id": id,
        "name": name,
        "code": code,
        "bin": bin,
        "shortName": short_name,
        "logo": f"https://api.vietqr.io/img/{code}.png",
        "transferSupported": 1,
        "lookupSupported": 1,
    }


def make_qr_data_url(mode="RGBA"):
    image = Image.new(mode, (32, 32))
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode()


@pytest.fixture
def raw_banks():
    return [
        make_bank(17, "Ngân hàng TMCP Ngoại Thương Việt Nam", "Vietcombank", "VCB", "970436"),
        make_bank(43, "Ngân hàng TMCP Kỹ thương Việt Nam", "Techcombank", "TCB", "970407"),
        make_bank(21, "Ngân hàng TMCP Quân đội", "MBBank", "MB", "970422"),
        make_bank(2, "Ngân hàng TMCP Việt Nam Thịnh Vượng", "VPBank", "VPB", "970432"),
    ]


class FakeClock:
    def __init__(self, start=None):
        self.now = start or datetime(2026, 10, 19, 8, 0, 0)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class FakeVietQRClient:
    """Records every call; behaviour is driven by plain attributes."""

    def __init__(self, banks):
        self.banks = banks
        self.fetch_error = None
        self.lookup_result = {}
        self.lookup_error = None
        self.generate_error = None
        self.generate_result = {"qrCode": "00020101021238570010A000000727", "qrDataURL": make_qr_data_url()}
        self.deeplink_apps = []
        self.fetch_count = 0
        self.lookup_calls = []
        self.generate_calls = []
        self.deeplink_calls = 0

    async def fetch_banks(self):
        self.fetch_count += 1
        await asyncio.sleep(0)
        if self.fetch_error:
            raise self.fetch_error
        return list(self.banks)

    async def lookup_account(self, bank_bin, account_no):
        self.lookup_calls.append((bank_bin, account_no))
        if self.lookup_error:
            raise self.lookup_error
        return self.lookup_result

    async def generate(self, payload):
        self.generate_calls.append(payload)
        if self.generate_error:
            raise self.generate_error
        return self.generate_result

    async def fetch_deeplink_apps(self, url):
        self.deeplink_calls += 1
        return self.deeplink_apps


class FakeGeminiClient:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.prompts = []

    async def generate_text(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.response


def gemini_json(**fields):
    data = {"bank": "vpbank", "accountName": "UNKNOWN", "amount": "0", "accountNumber": None, "message": ""}
    data.update(fields)
    return "```json\n" + json.dumps(data, ensure_ascii=False) + "\n```"


@pytest.fixture
def settings():
    settings = Settings()
    settings.VIETQR_CLIENT_ID = "client-id"
    settings.VIETQR_API_KEY = "api-key"
    settings.GEMINI_API_KEY = "gemini-key"
    settings.VIETQR_QR_FORMAT = "compact"
    return settings


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def vietqr_client(raw_banks):
    return FakeVietQRClient(raw_banks)


@pytest.fixture
def bank_cache(clock):
    return BankDirectoryCache(ttl=timedelta(hours=24), clock=clock)


@pytest.fixture
def bank_directory(vietqr_client, bank_cache):
    return BankDirectory(vietqr_client, bank_cache)


@pytest.fixture
def gemini_client():
    return FakeGeminiClient(response=gemini_json(
        accountName="NGUYEN TRUONG GIANG", amount="250000", accountNumber="1234567890",
    ))


@pytest.fixture
def orchestrator(bank_directory, vietqr_client, gemini_client, settings):
    return QROrchestrator(
        bank_directory,
        GeminiTextParser(gemini_client),
        AccountNameResolver(vietqr_client, FALLBACK_NAME),
        vietqr_client,
        settings,
    )


@pytest.fixture
def container(settings, vietqr_client, bank_cache, bank_directory, orchestrator):
    return ServiceContainer(
        settings=settings,
        vietqr_client=vietqr_client,
        bank_cache=bank_cache,
        bank_directory=bank_directory,
        deeplink_service=BankDeeplinkService(vietqr_client, settings.VIETQR_DEEPLINK_URL),
        orchestrator=orchestrator,
    )


@pytest.fixture
def upstream_error():
    return UpstreamError("VietQR API error: Service unavailable")
