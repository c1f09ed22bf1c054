"""
HTTP surface of the ordering service

Runs the real FastAPI app over httpx against the per-test SQLite database.
Callers authenticate with bearer tokens minted by the same JwtAuth the
service uses to verify them.
"""

from uuid import uuid4

from httpx import AsyncClient
import pytest

from src.service.ordering.domain.entity.user_entity import UserEntity
from test.service.ordering.builders import (
    BUYER_ID,
    GADGET_ID,
    OTHER_BUYER_ID,
    SELLER_ID,
    WIDGET_ID,
    make_admin,
    make_token,
    make_user,
)


pytestmark = pytest.mark.usefixtures('seeded')

ORDER_URL = '/api/order'


@pytest.fixture
def auth_headers():
    def _headers(user: UserEntity) -> dict[str, str]:
        return {'Authorization': f'Bearer {make_token(user)}'}

    return _headers


@pytest.fixture
def buyer(auth_headers):
    return auth_headers(make_user(BUYER_ID))


@pytest.fixture
def seller(auth_headers):
    return auth_headers(make_user(SELLER_ID))


@pytest.fixture
def stranger(auth_headers):
    return auth_headers(make_user(OTHER_BUYER_ID))


@pytest.fixture
def admin(auth_headers):
    return auth_headers(make_admin())


@pytest.fixture
def place_order(client: AsyncClient, buyer):
    async def _place(items=None) -> dict:
        response = await client.post(
            ORDER_URL,
            json={'items': items or [{'product_id': WIDGET_ID, 'quantity': 2}]},
            headers=buyer,
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _place


class TestCreateOrderApi:
    @pytest.mark.asyncio
    async def test_created_order_payload(self, place_order, stock_of):
        order = await place_order()

        assert order['status'] == 'pending'
        assert order['total'] == '21.98'
        assert order['buyer']['id'] == BUYER_ID
        assert len(order['items']) == 1
        item = order['items'][0]
        assert item['quantity'] == 2
        assert item['price'] == '10.99'
        assert item['product']['id'] == WIDGET_ID
        assert item['product']['seller']['id'] == SELLER_ID
        assert await stock_of(WIDGET_ID) == 8

    @pytest.mark.asyncio
    async def test_requires_bearer_token(self, client: AsyncClient):
        response = await client.post(
            ORDER_URL, json={'items': [{'product_id': WIDGET_ID, 'quantity': 1}]}
        )

        assert response.status_code == 401
        assert response.json() == {'detail': 'Not authenticated'}

    @pytest.mark.asyncio
    async def test_garbage_token(self, client: AsyncClient):
        response = await client.get(
            f'{ORDER_URL}/my_orders', headers={'Authorization': 'Bearer not-a-jwt'}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        'payload',
        [
            {'items': []},
            {'items': [{'product_id': WIDGET_ID, 'quantity': 0}]},
            {},
        ],
    )
    async def test_malformed_body(self, client: AsyncClient, buyer, payload):
        response = await client.post(ORDER_URL, json=payload, headers=buyer)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_insufficient_stock_message(self, client: AsyncClient, buyer, stock_of):
        response = await client.post(
            ORDER_URL,
            json={'items': [{'product_id': GADGET_ID, 'quantity': 5}]},
            headers=buyer,
        )

        assert response.status_code == 400
        assert response.json() == {
            'detail': 'Insufficient stock for product "Gadget". Available: 3, Requested: 5'
        }
        assert await stock_of(GADGET_ID) == 3

    @pytest.mark.asyncio
    async def test_unknown_product(self, client: AsyncClient, buyer):
        response = await client.post(
            ORDER_URL, json={'items': [{'product_id': 999, 'quantity': 1}]}, headers=buyer
        )

        assert response.status_code == 404


class TestReadOrderApi:
    @pytest.mark.asyncio
    async def test_buyer_and_seller_can_read(self, client: AsyncClient, place_order, buyer, seller):
        order = await place_order()

        for headers in (buyer, seller):
            response = await client.get(f'{ORDER_URL}/{order["id"]}', headers=headers)
            assert response.status_code == 200
            assert response.json()['id'] == order['id']

    @pytest.mark.asyncio
    async def test_stranger_is_forbidden(self, client: AsyncClient, place_order, stranger):
        order = await place_order()

        response = await client.get(f'{ORDER_URL}/{order["id"]}', headers=stranger)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_unknown_order(self, client: AsyncClient, admin):
        order_id = uuid4()

        response = await client.get(f'{ORDER_URL}/{order_id}', headers=admin)

        assert response.status_code == 404
        assert response.json() == {'detail': f'Order with id {order_id} not found'}

    @pytest.mark.asyncio
    async def test_admin_listing_is_paginated(self, client: AsyncClient, place_order, admin):
        for _ in range(3):
            await place_order(items=[{'product_id': WIDGET_ID, 'quantity': 1}])

        response = await client.get(ORDER_URL, params={'page': 2, 'limit': 2}, headers=admin)

        assert response.status_code == 200
        body = response.json()
        assert len(body['data']) == 1
        assert body['meta'] == {
            'page': 2,
            'limit': 2,
            'total': 3,
            'total_pages': 2,
            'has_next_page': False,
            'has_previous_page': True,
        }

    @pytest.mark.asyncio
    async def test_full_listing_is_admin_only(self, client: AsyncClient, buyer):
        response = await client.get(ORDER_URL, headers=buyer)

        assert response.status_code == 403
        assert response.json() == {'detail': 'Only admins can perform this action'}

    @pytest.mark.asyncio
    async def test_my_orders_and_my_sales(
        self, client: AsyncClient, place_order, buyer, seller, stranger
    ):
        order = await place_order()

        mine = (await client.get(f'{ORDER_URL}/my_orders', headers=buyer)).json()
        sales = (await client.get(f'{ORDER_URL}/my_sales', headers=seller)).json()
        empty = (await client.get(f'{ORDER_URL}/my_sales', headers=stranger)).json()

        assert [o['id'] for o in mine['data']] == [order['id']]
        assert [o['id'] for o in sales['data']] == [order['id']]
        assert empty['data'] == []
        assert empty['meta']['total'] == 0

    @pytest.mark.asyncio
    async def test_limit_above_maximum_is_rejected(self, client: AsyncClient, buyer):
        response = await client.get(
            f'{ORDER_URL}/my_orders', params={'limit': 10_000}, headers=buyer
        )

        assert response.status_code == 400


class TestOrderStatusApi:
    @pytest.mark.asyncio
    async def test_seller_accepts_then_cannot_go_back(
        self, client: AsyncClient, place_order, seller
    ):
        order = await place_order()
        url = f'{ORDER_URL}/{order["id"]}/status'

        accepted = await client.put(url, json={'status': 'accepted'}, headers=seller)
        backwards = await client.put(url, json={'status': 'pending'}, headers=seller)

        assert accepted.status_code == 200
        assert accepted.json()['status'] == 'accepted'
        assert backwards.status_code == 400
        assert backwards.json() == {
            'detail': 'Invalid status transition from "accepted" to "pending". '
            'Allowed transitions: delivered, canceled'
        }

    @pytest.mark.asyncio
    async def test_buyer_cannot_update_status(self, client: AsyncClient, place_order, buyer):
        order = await place_order()

        response = await client.put(
            f'{ORDER_URL}/{order["id"]}/status', json={'status': 'accepted'}, headers=buyer
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_unknown_status_value(self, client: AsyncClient, place_order, seller):
        order = await place_order()

        response = await client.put(
            f'{ORDER_URL}/{order["id"]}/status', json={'status': 'shipped'}, headers=seller
        )

        assert response.status_code == 400


class TestCancelOrderApi:
    @pytest.mark.asyncio
    async def test_buyer_cancel_restores_stock(
        self, client: AsyncClient, place_order, buyer, stock_of
    ):
        order = await place_order()

        first = await client.delete(f'{ORDER_URL}/{order["id"]}', headers=buyer)
        second = await client.delete(f'{ORDER_URL}/{order["id"]}', headers=buyer)

        assert first.status_code == 200
        assert first.json()['status'] == 'canceled'
        assert second.status_code == 400
        assert second.json() == {
            'detail': 'Cannot cancel order with status "canceled". '
            'Only pending orders can be canceled'
        }
        assert await stock_of(WIDGET_ID) == 10

    @pytest.mark.asyncio
    async def test_seller_cannot_cancel(self, client: AsyncClient, place_order, seller):
        order = await place_order()

        response = await client.delete(f'{ORDER_URL}/{order["id"]}', headers=seller)

        assert response.status_code == 403
        assert response.json() == {'detail': 'You can only cancel your own orders'}


class TestCommonEndpoints:
    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient):
        response = await client.get('/health')

        assert response.status_code == 200
        assert response.json()['status'] == 'healthy'

    @pytest.mark.asyncio
    async def test_metrics_exposes_order_counters(self, client: AsyncClient, place_order):
        await place_order()

        response = await client.get('/metrics')

        assert response.status_code == 200
        assert 'orders_created_total' in response.text
