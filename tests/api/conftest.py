"""Fixtures for API tests: the app wired to stores on the temporary database."""

from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from stockroom.api.dependencies import (
    get_apply_movement_use_case,
    get_cancel_purchase_order_use_case,
    get_cat_store,
    get_create_product_use_case,
    get_create_purchase_order_use_case,
    get_create_user_use_case,
    get_dashboard_stats_use_case,
    get_delete_user_use_case,
    get_inv_store,
    get_po_store,
    get_receive_purchase_order_use_case,
    get_report_statistics_use_case,
    get_sup_store,
    get_transition_purchase_order_use_case,
    get_update_user_profile_use_case,
    get_usr_store,
)
from stockroom.api.main import app
from stockroom.application.use_cases import (
    ApplyMovementUseCase,
    CancelPurchaseOrderUseCase,
    CreateProductUseCase,
    CreatePurchaseOrderUseCase,
    CreateUserUseCase,
    DeleteUserUseCase,
    GetDashboardStatsUseCase,
    GetReportStatisticsUseCase,
    ReceivePurchaseOrderUseCase,
    TransitionPurchaseOrderUseCase,
    UpdateUserProfileUseCase,
)

ACTOR_HEADERS = {"X-Actor-Id": "clerk-1"}


@pytest_asyncio.fixture
async def wired_app(
    catalog_store, supplier_store, inventory_store, purchase_order_store, user_store
):
    """App whose stores and use cases all point at the test pool."""
    receive = ReceivePurchaseOrderUseCase(purchase_order_store)
    cancel = CancelPurchaseOrderUseCase(purchase_order_store)
    overrides = {
        get_cat_store: lambda: catalog_store,
        get_sup_store: lambda: supplier_store,
        get_inv_store: lambda: inventory_store,
        get_po_store: lambda: purchase_order_store,
        get_usr_store: lambda: user_store,
        get_apply_movement_use_case: lambda: ApplyMovementUseCase(inventory_store),
        get_create_product_use_case: lambda: CreateProductUseCase(catalog_store),
        get_create_purchase_order_use_case: lambda: CreatePurchaseOrderUseCase(
            purchase_order_store, supplier_store, catalog_store
        ),
        get_receive_purchase_order_use_case: lambda: receive,
        get_cancel_purchase_order_use_case: lambda: cancel,
        get_transition_purchase_order_use_case: lambda: TransitionPurchaseOrderUseCase(
            receive, cancel
        ),
        get_dashboard_stats_use_case: lambda: GetDashboardStatsUseCase(
            catalog_store, inventory_store, purchase_order_store
        ),
        get_report_statistics_use_case: lambda: GetReportStatisticsUseCase(
            catalog_store, supplier_store, inventory_store, purchase_order_store
        ),
        get_create_user_use_case: lambda: CreateUserUseCase(user_store),
        get_update_user_profile_use_case: lambda: UpdateUserProfileUseCase(user_store),
        get_delete_user_use_case: lambda: DeleteUserUseCase(user_store),
    }
    app.dependency_overrides.update(overrides)
    yield app
    for dependency in overrides:
        app.dependency_overrides.pop(dependency, None)


@pytest_asyncio.fixture
async def client(wired_app) -> AsyncGenerator[AsyncClient, None]:
    """Client that identifies itself with the actor header."""
    transport = ASGITransport(app=wired_app)
    async with AsyncClient(
        transport=transport, base_url="http://test", headers=ACTOR_HEADERS
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def anonymous_client(wired_app) -> AsyncGenerator[AsyncClient, None]:
    """Client without the actor header."""
    transport = ASGITransport(app=wired_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
