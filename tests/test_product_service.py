"""
Product Catalog API — Product Service Unit Tests
=================================================

What:  Tests for ProductService validation, id handling, error mapping and
       degraded mode.
How:   Uses AsyncMock store doubles (no database).

What we test:
    ✅ Valid payloads reach the store with defaults applied
    ✅ Invalid payloads raise ValidationError and never reach the store
    ✅ Missing and malformed ids raise NotFoundError
    ✅ Store failures become DatabaseError
    ✅ Sample catalog fallback on list and API info
"""

import uuid
from datetime import datetime, timezone

import pytest

from product_api.exceptions import DatabaseError, NotFoundError, ValidationError
from product_api.schemas.product import ProductResponse
from product_api.services.product_service import ProductService
from product_api.services.sample_data import SAMPLE_PRODUCTS


def make_product(**overrides) -> ProductResponse:
    now = datetime.now(timezone.utc)
    fields = {
        "id": uuid.uuid4(),
        "name": "Laptop",
        "price": 1200.0,
        "category": "Electronics",
        "created_at": now,
        "updated_at": now,
    }
    fields.update(overrides)
    return ProductResponse(**fields)


class TestProductServiceCreate:
    """Tests for create_product."""

    @pytest.mark.asyncio
    async def test_create_passes_validated_fields(self, mock_store, laptop_payload):
        stored = make_product()
        mock_store.insert_one.return_value = stored
        service = ProductService(mock_store)

        result = await service.create_product(laptop_payload)

        assert result == stored
        mock_store.insert_one.assert_awaited_once_with(
            {"name": "Laptop", "price": 1200.0, "category": "Electronics"}
        )

    @pytest.mark.asyncio
    async def test_create_defaults_category_and_trims_name(self, mock_store):
        mock_store.insert_one.return_value = make_product(category="Other")
        service = ProductService(mock_store)

        await service.create_product({"name": "  Desk Lamp  ", "price": 40})

        fields = mock_store.insert_one.await_args.args[0]
        assert fields == {"name": "Desk Lamp", "price": 40.0, "category": "Other"}

    @pytest.mark.asyncio
    async def test_create_short_name_rejected(self, mock_store):
        service = ProductService(mock_store)

        with pytest.raises(ValidationError) as exc_info:
            await service.create_product({"name": "Ab", "price": 10})

        assert "name" in exc_info.value.message
        assert set(exc_info.value.errors) == {"name"}
        mock_store.insert_one.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("price", [float("inf"), float("-inf"), float("nan")])
    async def test_create_non_finite_price_rejected(self, mock_store, price):
        service = ProductService(mock_store)

        with pytest.raises(ValidationError) as exc_info:
            await service.create_product({"name": "Laptop", "price": price})

        assert set(exc_info.value.errors) == {"price"}
        mock_store.insert_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_reports_every_failing_field(self, mock_store):
        service = ProductService(mock_store)

        with pytest.raises(ValidationError) as exc_info:
            await service.create_product({"price": 0, "category": "Toys"})

        assert set(exc_info.value.errors) == {"name", "price", "category"}
        assert exc_info.value.context["fields"] == exc_info.value.errors

    @pytest.mark.asyncio
    async def test_create_store_failure_is_database_error(self, failing_store, laptop_payload):
        service = ProductService(failing_store)

        with pytest.raises(DatabaseError) as exc_info:
            await service.create_product(laptop_payload)

        assert exc_info.value.context["operation"] == "insert"
        assert exc_info.value.context["error_type"] == "ConnectionRefusedError"


class TestProductServiceLookup:
    """Tests for get_product and delete_product."""

    @pytest.mark.asyncio
    async def test_get_found(self, mock_store):
        product = make_product()
        mock_store.find_by_id.return_value = product
        service = ProductService(mock_store)

        result = await service.get_product(str(product.id))

        assert result == product
        mock_store.find_by_id.assert_awaited_once_with(product.id)

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, mock_store):
        mock_store.find_by_id.return_value = None
        service = ProductService(mock_store)

        with pytest.raises(NotFoundError):
            await service.get_product(str(uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_malformed_id_is_not_found(self, mock_store):
        service = ProductService(mock_store)

        with pytest.raises(NotFoundError, match="not-a-uuid"):
            await service.get_product("not-a-uuid")

        mock_store.find_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_returns_prior_content(self, mock_store):
        product = make_product()
        mock_store.find_by_id_and_delete.return_value = product
        service = ProductService(mock_store)

        result = await service.delete_product(str(product.id))

        assert result.name == "Laptop"

    @pytest.mark.asyncio
    async def test_delete_missing_raises_not_found(self, mock_store):
        mock_store.find_by_id_and_delete.return_value = None
        service = ProductService(mock_store)

        with pytest.raises(NotFoundError):
            await service.delete_product(str(uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_delete_store_failure_is_database_error(self, failing_store):
        service = ProductService(failing_store)

        with pytest.raises(DatabaseError):
            await service.delete_product(str(uuid.uuid4()))


class TestProductServiceUpdate:
    """Tests for update_product."""

    @pytest.mark.asyncio
    async def test_update_sends_only_supplied_fields(self, mock_store):
        product = make_product(price=999.0)
        mock_store.find_by_id_and_update.return_value = product
        service = ProductService(mock_store)

        result = await service.update_product(str(product.id), {"price": 999})

        assert result.price == 999.0
        mock_store.find_by_id_and_update.assert_awaited_once_with(product.id, {"price": 999.0})

    @pytest.mark.asyncio
    async def test_update_ignores_unknown_fields(self, mock_store):
        product = make_product()
        mock_store.find_by_id_and_update.return_value = product
        service = ProductService(mock_store)

        await service.update_product(str(product.id), {"id": "other", "colour": "red", "name": "Laptop Pro"})

        assert mock_store.find_by_id_and_update.await_args.args[1] == {"name": "Laptop Pro"}

    @pytest.mark.asyncio
    async def test_update_null_field_rejected(self, mock_store):
        service = ProductService(mock_store)

        with pytest.raises(ValidationError) as exc_info:
            await service.update_product(str(uuid.uuid4()), {"name": None})

        assert "name" in exc_info.value.errors
        mock_store.find_by_id_and_update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_validates_before_id_lookup(self, mock_store):
        service = ProductService(mock_store)

        with pytest.raises(ValidationError):
            await service.update_product("not-a-uuid", {"price": -5})

    @pytest.mark.asyncio
    async def test_update_missing_raises_not_found(self, mock_store):
        mock_store.find_by_id_and_update.return_value = None
        service = ProductService(mock_store)

        with pytest.raises(NotFoundError):
            await service.update_product(str(uuid.uuid4()), {"price": 10})


class TestProductServiceList:
    """Tests for list_products and the sample catalog fallback."""

    @pytest.mark.asyncio
    async def test_list_from_store(self, mock_store):
        products = [make_product(), make_product(name="Notebook", price=5.0)]
        mock_store.find_many.return_value = products
        service = ProductService(mock_store)

        result = await service.list_products()

        assert result.count == 2
        assert result.data == products
        assert result.source == "store"
        assert result.degraded is False

    @pytest.mark.asyncio
    async def test_list_empty_store_is_not_replaced(self, mock_store):
        service = ProductService(mock_store)

        result = await service.list_products()

        assert result.count == 0
        assert result.source == "store"

    @pytest.mark.asyncio
    async def test_list_store_failure_serves_samples(self, failing_store, caplog):
        service = ProductService(failing_store, sample_fallback=True)

        result = await service.list_products()

        assert result.degraded is True
        assert result.source == "sample"
        assert [p.name for p in result.data] == [p.name for p in SAMPLE_PRODUCTS]
        assert "degraded mode" in caplog.text

    @pytest.mark.asyncio
    async def test_list_store_failure_without_fallback(self, failing_store):
        service = ProductService(failing_store, sample_fallback=False)

        with pytest.raises(DatabaseError):
            await service.list_products()


class TestProductServiceApiInfo:
    """Tests for the GET / view."""

    endpoints = {"GET /": "API info"}

    @pytest.mark.asyncio
    async def test_info_with_live_products(self, mock_store):
        mock_store.find_many.return_value = [make_product()]
        service = ProductService(mock_store)

        info = await service.api_info(self.endpoints)

        assert info.database_connected is True
        assert info.total_products == 1
        assert info.source == "store"
        assert info.degraded is False
        assert info.endpoints == self.endpoints

    @pytest.mark.asyncio
    async def test_info_empty_store_uses_samples(self, mock_store):
        service = ProductService(mock_store)

        info = await service.api_info(self.endpoints)

        assert info.source == "sample"
        assert info.total_products == 4
        assert info.degraded is False

    @pytest.mark.asyncio
    async def test_info_unreachable_store_skips_listing(self, failing_store):
        service = ProductService(failing_store)

        info = await service.api_info(self.endpoints)

        assert info.database_connected is False
        assert info.degraded is True
        assert info.source == "sample"
        failing_store.find_many.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_info_ping_exception_is_disconnected(self, mock_store):
        mock_store.ping.side_effect = RuntimeError("driver bug")
        service = ProductService(mock_store)

        info = await service.api_info(self.endpoints)

        assert info.database_connected is False
        assert info.degraded is True
        assert info.source == "sample"
        mock_store.find_many.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_info_list_failure_after_ping(self, mock_store):
        mock_store.find_many.side_effect = RuntimeError("query failed")
        service = ProductService(mock_store)

        info = await service.api_info(self.endpoints)

        assert info.database_connected is True
        assert info.degraded is True
        assert info.total_products == 4

    @pytest.mark.asyncio
    async def test_info_without_fallback_reports_empty(self, failing_store):
        service = ProductService(failing_store, sample_fallback=False)

        info = await service.api_info(self.endpoints)

        assert info.products == []
        assert info.total_products == 0
        assert info.degraded is True
