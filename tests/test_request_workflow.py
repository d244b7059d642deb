"""Status transitions and the stock deduction performed on approval."""

import pytest

from crud import request_workflow
from exceptions import RequestNotFound, RequestLocked, TransactionFailure
from models.items import Item, ItemStatus
from models.request_items import RequestItem
from models.requests import Request, RequestStatus
from models.stock_history import StockHistory, ChangeType


def _history_for(db, item_id):
    return db.query(StockHistory).filter(StockHistory.item_id == item_id).order_by(StockHistory.id).all()


class TestApproval:

    def test_approval_deducts_and_records_history(self, db, create_item, create_request):
        item = create_item(quantity=10, min_quantity=2)
        request = create_request([(item, 5)])

        result = request_workflow.set_request_status(db, request.id, RequestStatus.APPROVED, actor="manager-1")

        assert result.status == RequestStatus.APPROVED
        assert result.updated_by == "manager-1"
        db.refresh(item)
        assert item.quantity == 5
        assert item.status == ItemStatus.IN_STOCK

        history = _history_for(db, item.id)
        assert len(history) == 1
        entry = history[0]
        assert entry.change_type == ChangeType.REQUEST
        assert (entry.quantity_before, entry.quantity_change, entry.quantity_after) == (10, -5, 5)
        assert entry.notes == f"Approved request {request.id}"
        assert entry.created_by == "manager-1"

    def test_over_request_clamps_stock_and_keeps_nominal_change(self, db, create_item, create_request):
        item = create_item(quantity=10, min_quantity=2)
        request = create_request([(item, 20)])

        request_workflow.set_request_status(db, request.id, RequestStatus.APPROVED)

        db.refresh(item)
        assert item.quantity == 0
        assert item.status == ItemStatus.OUT_OF_STOCK
        entry = _history_for(db, item.id)[0]
        assert entry.quantity_before == 10
        assert entry.quantity_change == -20
        assert entry.quantity_after == 0

    def test_approval_snapshots_stock_on_lines(self, db, create_item, create_request):
        item = create_item(quantity=8)
        request = create_request([(item, 3)])

        request_workflow.set_request_status(db, request.id, RequestStatus.APPROVED)

        line = db.query(RequestItem).filter(RequestItem.request_id == request.id).one()
        assert (line.stock_before, line.stock_after) == (8, 5)

    def test_reapproval_deducts_once(self, db, create_item, create_request):
        item = create_item(quantity=10)
        request = create_request([(item, 4)])

        request_workflow.set_request_status(db, request.id, RequestStatus.APPROVED)
        request_workflow.set_request_status(db, request.id, RequestStatus.APPROVED)

        db.refresh(item)
        assert item.quantity == 6
        assert len(_history_for(db, item.id)) == 1

    def test_same_item_on_two_lines_deducts_both(self, db, create_item, create_request):
        item = create_item(quantity=10, min_quantity=3)
        request = create_request([(item, 4), (item, 3)])

        request_workflow.set_request_status(db, request.id, RequestStatus.APPROVED)

        db.refresh(item)
        assert item.quantity == 3
        assert item.status == ItemStatus.LOW_STOCK
        history = _history_for(db, item.id)
        assert [(h.quantity_before, h.quantity_after) for h in history] == [(10, 6), (6, 3)]

    def test_failed_line_rolls_back_every_line(self, db, create_item, create_request):
        item = create_item(quantity=10)
        request = create_request([(item, 4)])
        # A line pointing at an item that does not exist
        db.add(RequestItem(request_id=request.id, item_id=9999, quantity=1))
        db.commit()

        with pytest.raises(TransactionFailure):
            request_workflow.set_request_status(db, request.id, RequestStatus.APPROVED)

        db.expire_all()
        assert db.get(Item, item.id).quantity == 10
        assert db.query(StockHistory).count() == 0
        assert db.get(Request, request.id).status == RequestStatus.PENDING


class TestOtherTransitions:

    def test_rejection_changes_only_status(self, db, create_item, create_request):
        item = create_item(quantity=10)
        request = create_request([(item, 4)])

        result = request_workflow.set_request_status(db, request.id, "rejected")

        assert result.status == RequestStatus.REJECTED
        db.refresh(item)
        assert item.quantity == 10
        assert db.query(StockHistory).count() == 0

    def test_completion_after_approval_does_not_deduct_again(self, db, create_item, create_request):
        item = create_item(quantity=10)
        request = create_request([(item, 4)])

        request_workflow.set_request_status(db, request.id, RequestStatus.APPROVED)
        request_workflow.set_request_status(db, request.id, RequestStatus.COMPLETED)

        db.refresh(item)
        assert item.quantity == 6
        assert len(_history_for(db, item.id)) == 1

    def test_completed_request_is_locked(self, db, create_item, create_request):
        item = create_item(quantity=10)
        request = create_request([(item, 4)], status=RequestStatus.COMPLETED)

        with pytest.raises(RequestLocked):
            request_workflow.set_request_status(db, request.id, RequestStatus.APPROVED)

        db.refresh(item)
        assert item.quantity == 10
        assert db.get(Request, request.id).status == RequestStatus.COMPLETED

    def test_unknown_request(self, db):
        with pytest.raises(RequestNotFound):
            request_workflow.set_request_status(db, "missing-id", RequestStatus.APPROVED)

    def test_invalid_status_value(self, db, create_item, create_request):
        request = create_request([(create_item(), 1)])

        with pytest.raises(ValueError):
            request_workflow.set_request_status(db, request.id, "shipped")
