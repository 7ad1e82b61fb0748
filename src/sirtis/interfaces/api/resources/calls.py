"""Call-centre call and case API resources."""

from dataclasses import fields
from datetime import date
from decimal import Decimal, InvalidOperation
from uuid import UUID

import falcon.asgi

from sirtis.application.dto.call_dto import (
    ENUM_FIELDS,
    UPDATABLE_FIELDS,
    CallCreateInput,
    CallUpdateInput,
)
from sirtis.application.ports import Clock
from sirtis.application.use_cases.call.create_call import CreateCallUseCase
from sirtis.application.use_cases.call.get_call import GetCallUseCase
from sirtis.application.use_cases.call.list_calls import ListCallsUseCase
from sirtis.application.use_cases.call.update_call import UpdateCallUseCase
from sirtis.domain.entities import CallRecord
from sirtis.domain.exceptions import ValidationError
from sirtis.domain.value_objects import CallStatus
from sirtis.interfaces.api.context import read_json_object, require_subject

_IDENTIFIER_FIELDS = ("call_number", "case_number")
_CREATE_FIELDS = frozenset(f.name for f in fields(CallCreateInput))
_BOOL_FIELDS = frozenset({"follow_up_required", "voucher_issued", "is_case"})
_ENUM_ALIASES = {"walk": "walk_in", "walkin": "walk_in"}


def _parse_bool(name: str, value: object) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("yes", "true", "1"):
        return True
    if text in ("no", "false", "0", ""):
        return False
    raise ValidationError(f"{name}: expected a boolean, got {value!r}")


def _coerce(name: str, value: object) -> object:
    """Convert one JSON field into its DTO type. Raises ValidationError."""
    if name in _BOOL_FIELDS:
        return _parse_bool(name, value)
    if value is None:
        return None
    if name in ENUM_FIELDS:
        text = str(value).strip().lower().replace("-", "_").replace(" ", "_")
        try:
            return ENUM_FIELDS[name](_ENUM_ALIASES.get(text, text))
        except ValueError:
            allowed = ", ".join(m.value for m in ENUM_FIELDS[name])
            raise ValidationError(f"{name}: must be one of {allowed}") from None
    if name == "follow_up_date":
        try:
            return date.fromisoformat(str(value)[:10])
        except ValueError:
            raise ValidationError(f"{name}: expected YYYY-MM-DD") from None
    if name == "voucher_value":
        if value == "":
            return None
        try:
            return Decimal(str(value))
        except InvalidOperation:
            raise ValidationError(f"{name}: expected a number") from None
    text = str(value).strip()
    return text or None


def _reject_identifiers(body: dict) -> None:
    for name in _IDENTIFIER_FIELDS:
        if name in body:
            raise ValidationError(f"{name} is assigned by the server and cannot be set")


def parse_call_create(body: dict) -> CallCreateInput:
    """Build CallCreateInput from a JSON body. Unknown keys are ignored."""
    _reject_identifiers(body)
    values = {k: _coerce(k, v) for k, v in body.items() if k in _CREATE_FIELDS}
    for name in ENUM_FIELDS:
        if name in values and values[name] is None:
            del values[name]
    return CallCreateInput(**values)


def parse_call_update(body: dict) -> CallUpdateInput:
    """Build CallUpdateInput from a JSON body. Unknown keys are rejected later."""
    _reject_identifiers(body)
    is_case = _parse_bool("is_case", body["is_case"]) if "is_case" in body else None
    changes = {
        k: _coerce(k, v) if k in UPDATABLE_FIELDS else v
        for k, v in body.items()
        if k != "is_case"
    }
    for name in ENUM_FIELDS:
        if name in changes and changes[name] is None:
            raise ValidationError(f"{name} cannot be null")
    return CallUpdateInput(changes=changes, is_case=is_case)


def serialize_call(record: CallRecord) -> dict:
    """JSON representation of a call record."""
    return {
        "id": str(record.id),
        "call_number": record.call_number,
        "case_number": record.case_number,
        "is_case": record.is_case,
        "caller_name": record.caller_name,
        "caller_phone": record.caller_phone,
        "caller_email": record.caller_email,
        "caller_age": record.caller_age,
        "caller_gender": record.caller_gender,
        "caller_province": record.caller_province,
        "caller_address": record.caller_address,
        "client_name": record.client_name,
        "client_age": record.client_age,
        "client_sex": record.client_sex,
        "client_province": record.client_province,
        "communication_mode": record.communication_mode.value,
        "call_type": record.call_type.value,
        "purpose": record.purpose,
        "validity": record.validity,
        "description": record.description,
        "notes": record.notes,
        "priority": record.priority.value,
        "status": record.status.value,
        "assigned_officer": record.assigned_officer,
        "follow_up_required": record.follow_up_required,
        "follow_up_date": record.follow_up_date.isoformat() if record.follow_up_date else None,
        "resolution": record.resolution,
        "voucher_issued": record.voucher_issued,
        "voucher_value": str(record.voucher_value) if record.voucher_value is not None else None,
        "created_by": record.created_by,
        "created_at": record.created_at.isoformat(),
        "updated_at": record.updated_at.isoformat(),
    }


def serialize_case(record: CallRecord, today: date) -> dict:
    """Call JSON plus the case due date and whether it is overdue on `today`."""
    data = serialize_call(record)
    data["due_date"] = record.due_date.isoformat()
    data["is_overdue"] = record.is_overdue(today)
    return data


def _list_params(req: falcon.asgi.Request) -> dict:
    limit = req.get_param_as_int("limit") or 20
    status = req.get_param("status")
    try:
        status_value = CallStatus(status) if status else None
    except ValueError:
        raise ValidationError(f"Unknown status: {status}") from None
    cursor = req.get_param("cursor")
    if cursor:
        try:
            UUID(cursor)
        except ValueError:
            raise ValidationError("Invalid cursor") from None
    return {
        "cursor": cursor,
        "limit": min(max(limit, 1), 100),
        "status": status_value,
    }


class CallsResource:
    """GET/POST /v1/call-centre/calls - list and log calls."""

    def __init__(
        self,
        create_call: CreateCallUseCase,
        list_calls: ListCallsUseCase,
    ) -> None:
        self._create_call = create_call
        self._list_calls = list_calls

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List calls."""
        records, next_cursor = await self._list_calls.execute(
            require_subject(req), **_list_params(req)
        )
        resp.media = {
            "items": [serialize_call(r) for r in records],
            "next_cursor": next_cursor,
        }
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Log a call; call number (and case number for cases) are allocated."""
        subject = require_subject(req)
        input_data = parse_call_create(await read_json_object(req))
        record = await self._create_call.execute(subject, input_data)
        resp.media = serialize_call(record)
        resp.status = falcon.HTTP_201


class CallResource:
    """GET/PUT /v1/call-centre/calls/{call_id} - view and update one call."""

    def __init__(self, get_call: GetCallUseCase, update_call: UpdateCallUseCase) -> None:
        self._get_call = get_call
        self._update_call = update_call

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        call_id: str,
    ) -> None:
        """Get call by id."""
        subject = require_subject(req)
        try:
            cid = UUID(call_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid call ID"}
            return

        record = await self._get_call.execute(subject, cid)
        resp.media = serialize_call(record)
        resp.status = falcon.HTTP_200

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        call_id: str,
    ) -> None:
        """Update call fields; {"is_case": true} promotes the call to a case."""
        subject = require_subject(req)
        try:
            cid = UUID(call_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid call ID"}
            return

        input_data = parse_call_update(await read_json_object(req))
        record = await self._update_call.execute(subject, cid, input_data)
        resp.media = serialize_call(record)
        resp.status = falcon.HTTP_200


class CasesResource:
    """GET /v1/call-centre/cases - calls that carry a case number."""

    def __init__(self, list_calls: ListCallsUseCase, clock: Clock) -> None:
        self._list_calls = list_calls
        self._clock = clock

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List cases."""
        records, next_cursor = await self._list_calls.execute(
            require_subject(req), cases_only=True, **_list_params(req)
        )
        today = self._clock.now().date()
        resp.media = {
            "items": [serialize_case(r, today) for r in records],
            "next_cursor": next_cursor,
        }
        resp.status = falcon.HTTP_200
