"""
工具 handler 單元測試

直接以已正規化的參數呼叫各 handler，驗證驅動呼叫與輸出格式。
"""

import json
from datetime import datetime, timezone

import pytest
from bson import ObjectId

from tools.base import OperationContext
from tools.handlers import AdminHandler, AggregationHandler, QueryHandler, WriteHandler
from tools.handlers.query_handler import NO_DOCUMENT_FOUND


@pytest.fixture
def ctx(mock_client, mock_database):
    return OperationContext(client=mock_client, database=mock_database, database_name="testdb")


class TestAggregationHandler:
    """聚合 handler 測試"""

    @pytest.mark.asyncio
    async def test_aggregate_returns_all_documents(self, ctx, mock_collection):
        """✅ aggregate 回傳全部結果"""
        pipeline = [{"$match": {"status": "open"}}, {"$group": {"_id": "$owner"}}]

        text = await AggregationHandler().execute("aggregate", {"collection": "orders", "pipeline": pipeline}, ctx)

        mock_collection.aggregate.assert_awaited_once_with(pipeline)
        assert json.loads(text) == [{"_id": 1, "name": "alpha"}]

    @pytest.mark.asyncio
    async def test_sample_builds_sample_stage(self, ctx, mock_collection):
        """✅ sample 使用 $sample 階段"""
        await AggregationHandler().execute("sample", {"collection": "orders", "count": 7}, ctx)
        mock_collection.aggregate.assert_awaited_once_with([{"$sample": {"size": 7}}])

    @pytest.mark.asyncio
    async def test_explain_runs_explain_command(self, ctx, mock_database):
        """✅ explain 透過 explain 命令取得查詢計畫"""
        pipeline = [{"$match": {"a": 1}}]

        text = await AggregationHandler().execute("explain", {"collection": "orders", "pipeline": pipeline}, ctx)

        command = mock_database.command.await_args.args[0]
        assert list(command)[0] == "explain"
        assert command["explain"] == {"aggregate": "orders", "pipeline": pipeline, "cursor": {}}
        assert command["verbosity"] == "queryPlanner"
        assert json.loads(text)["queryPlanner"]["winningPlan"]["stage"] == "COLLSCAN"


class TestQueryHandler:
    """查詢 handler 測試"""

    @pytest.mark.asyncio
    async def test_find_without_sort(self, ctx, mock_collection):
        """✅ sort 為空時不呼叫 sort"""
        args = {"collection": "orders", "filter": {"a": 1}, "projection": {}, "sort": {}, "limit": 10}

        await QueryHandler().execute("find", args, ctx)

        mock_collection.find.assert_called_once_with({"a": 1}, None)
        cursor = mock_collection.find.return_value
        cursor.sort.assert_not_called()
        cursor.limit.assert_called_once_with(10)

    @pytest.mark.asyncio
    async def test_find_with_sort_and_projection(self, ctx, mock_collection):
        """✅ 非空 sort 與 projection 會套用"""
        args = {
            "collection": "orders",
            "filter": {},
            "projection": {"name": 1},
            "sort": {"createdAt": -1, "name": 1},
            "limit": 5,
        }

        await QueryHandler().execute("find", args, ctx)

        mock_collection.find.assert_called_once_with({}, {"name": 1})
        mock_collection.find.return_value.sort.assert_called_once_with([("createdAt", -1), ("name", 1)])

    @pytest.mark.asyncio
    async def test_find_one_hit(self, ctx, mock_collection):
        """✅ findOne 找到文件"""
        text = await QueryHandler().execute("findOne", {"collection": "orders", "filter": {"_id": 1}, "projection": {}}, ctx)
        assert json.loads(text) == {"_id": 1, "name": "alpha"}

    @pytest.mark.asyncio
    async def test_find_one_miss(self, ctx, mock_collection):
        """✅ findOne 找不到時回傳明確訊息而非錯誤"""
        mock_collection.find_one.return_value = None

        text = await QueryHandler().execute("findOne", {"collection": "orders", "filter": {"_id": 999}, "projection": {}}, ctx)

        assert text == "No document found matching the criteria"
        assert text == NO_DOCUMENT_FOUND

    @pytest.mark.asyncio
    async def test_count(self, ctx, mock_collection):
        """✅ count 回傳符合條件的數量"""
        text = await QueryHandler().execute("count", {"collection": "orders", "filter": {"open": True}}, ctx)

        mock_collection.count_documents.assert_awaited_once_with({"open": True})
        assert json.loads(text) == {"count": 3}

    @pytest.mark.asyncio
    async def test_distinct(self, ctx, mock_collection):
        """✅ distinct 回傳欄位的不重複值"""
        text = await QueryHandler().execute("distinct", {"collection": "orders", "field": "status", "filter": {}}, ctx)

        mock_collection.distinct.assert_awaited_once_with("status", {})
        assert json.loads(text) == ["a", "b"]

    @pytest.mark.asyncio
    async def test_bson_types_serialized(self, ctx, mock_collection):
        """✅ ObjectId 與日期以 Extended JSON 輸出"""
        oid = ObjectId("65a1b2c3d4e5f60718293a4b")
        mock_collection.find_one.return_value = {
            "_id": oid,
            "createdAt": datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        }

        text = await QueryHandler().execute("findOne", {"collection": "orders", "filter": {}, "projection": {}}, ctx)

        doc = json.loads(text)
        assert doc["_id"] == {"$oid": str(oid)}
        assert doc["createdAt"]["$date"].startswith("2024-01-02T03:04:05")


class TestWriteHandler:
    """寫入 handler 測試"""

    @pytest.mark.asyncio
    async def test_insert_one_ack(self, ctx, mock_collection):
        """✅ insertOne 回傳確認與 insertedId"""
        text = await WriteHandler().execute("insertOne", {"collection": "t", "document": {"a": 1}}, ctx)

        mock_collection.insert_one.assert_awaited_once_with({"a": 1})
        assert json.loads(text) == {"acknowledged": True, "insertedId": 42}

    @pytest.mark.asyncio
    async def test_insert_many_ack(self, ctx, mock_collection):
        """✅ insertMany 回傳插入數量與 id"""
        text = await WriteHandler().execute("insertMany", {"collection": "t", "documents": [{"a": 1}, {"a": 2}]}, ctx)
        assert json.loads(text) == {"acknowledged": True, "insertedCount": 2, "insertedIds": [1, 2]}

    @pytest.mark.asyncio
    async def test_update_one_passes_upsert(self, ctx, mock_collection):
        """✅ updateOne 傳遞 upsert"""
        args = {"collection": "t", "filter": {"a": 1}, "update": {"$set": {"b": 2}}, "upsert": True}

        text = await WriteHandler().execute("updateOne", args, ctx)

        mock_collection.update_one.assert_awaited_once_with({"a": 1}, {"$set": {"b": 2}}, upsert=True)
        assert json.loads(text) == {
            "acknowledged": True,
            "matchedCount": 1,
            "modifiedCount": 1,
            "upsertedId": None,
            "upsertedCount": 0,
        }

    @pytest.mark.asyncio
    async def test_update_many(self, ctx, mock_collection):
        """✅ updateMany 回傳比對與修改數量"""
        text = await WriteHandler().execute("updateMany", {"collection": "t", "filter": {}, "update": {"$inc": {"n": 1}}}, ctx)

        mock_collection.update_many.assert_awaited_once_with({}, {"$inc": {"n": 1}})
        assert json.loads(text)["modifiedCount"] == 3

    @pytest.mark.asyncio
    async def test_delete_one_and_many(self, ctx, mock_collection):
        """✅ deleteOne/deleteMany 回傳刪除數量"""
        one = await WriteHandler().execute("deleteOne", {"collection": "t", "filter": {"a": 1}}, ctx)
        many = await WriteHandler().execute("deleteMany", {"collection": "t", "filter": {"a": 1}}, ctx)

        assert json.loads(one) == {"acknowledged": True, "deletedCount": 1}
        assert json.loads(many) == {"acknowledged": True, "deletedCount": 5}


class TestAdminHandler:
    """管理 handler 測試"""

    @pytest.mark.asyncio
    async def test_list_collection_names(self, ctx, mock_database):
        """✅ nameOnly=true 只回傳名稱"""
        text = await AdminHandler().execute("listCollections", {"nameOnly": True}, ctx)

        assert json.loads(text) == ["orders", "users"]
        mock_database.list_collections.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_list_collections_full(self, ctx, mock_database):
        """✅ nameOnly=false 回傳完整資訊"""
        text = await AdminHandler().execute("listCollections", {"nameOnly": False}, ctx)
        assert json.loads(text) == [{"name": "orders", "type": "collection"}]

    @pytest.mark.asyncio
    async def test_list_databases_uses_admin(self, ctx, mock_client):
        """✅ listDatabases 對 admin 執行 listDatabases 命令"""
        mock_client.admin.command.return_value = {"databases": [{"name": "testdb"}], "ok": 1.0}

        text = await AdminHandler().execute("listDatabases", {"nameOnly": True}, ctx)

        mock_client.admin.command.assert_awaited_once_with({"listDatabases": 1, "nameOnly": True})
        assert json.loads(text)["databases"] == [{"name": "testdb"}]

    @pytest.mark.asyncio
    async def test_drop_refusal_performs_no_drop(self, ctx, mock_database):
        """✅ confirm=false 不執行刪除"""
        text = await AdminHandler().execute("dropCollection", {"collection": "orders", "confirm": False}, ctx)

        assert "Refusing" in text
        assert "confirm=true" in text
        mock_database.drop_collection.assert_not_awaited()
