"""
Armory JSON views.

Thin handlers: parse the request, call the service, render JSON.
Identity comes from AccessContext (see armory.access).
"""

import json

from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_http_methods

from armory.access import require_role
from armory.exceptions import ArmoryError
from armory.models.enums import AssignmentKind
from armory.service import Assets
from armory.services.movements import MAX_QUANTITY


def _error(exc: ArmoryError) -> JsonResponse:
    return JsonResponse(exc.as_dict(), status=exc.http_status)


def _json_body(request) -> dict:
    if request.content_type != 'application/json':
        raise ArmoryError('INVALID_PAYLOAD', content_type=request.content_type)
    try:
        body = json.loads(request.body or b'{}')
    except (ValueError, UnicodeDecodeError):
        raise ArmoryError('INVALID_PAYLOAD') from None
    if not isinstance(body, dict):
        raise ArmoryError('INVALID_PAYLOAD')
    return body


def _quantity(value) -> int:
    """Coerce a JSON quantity to int; "5" is accepted, 5.5 is not."""
    if isinstance(value, bool):
        raise ArmoryError('INVALID_QUANTITY', requested=value)
    try:
        quantity = int(str(value).strip())
    except (TypeError, ValueError):
        raise ArmoryError('INVALID_QUANTITY', requested=value) from None
    if not 0 < quantity <= MAX_QUANTITY:
        raise ArmoryError('INVALID_QUANTITY', requested=quantity)
    return quantity


def _require(body: dict, *fields):
    missing = [f for f in fields if body.get(f) in (None, '')]
    if missing:
        raise ArmoryError('MISSING_FIELDS', fields=','.join(missing))


def _text(body: dict, field: str) -> str:
    value = body[field]
    if not isinstance(value, str):
        raise ArmoryError('INVALID_PAYLOAD', field=field)
    return value


def _home_base(context):
    if context.base is None:
        raise ArmoryError('BASE_REQUIRED')
    return context.base


def _user_ref(user):
    return user.get_username() if user else None


def _purchase_dict(p) -> dict:
    return {
        'id': p.pk,
        'baseId': p.base.code,
        'assetType': p.asset_type,
        'quantity': p.quantity,
        'date': p.timestamp.isoformat(),
        'user': _user_ref(p.user),
    }


def _transfer_dict(t) -> dict:
    return {
        'id': t.pk,
        'fromBaseId': t.from_base.code,
        'toBaseId': t.to_base.code,
        'assetType': t.asset_type,
        'quantity': t.quantity,
        'date': t.timestamp.isoformat(),
        'user': _user_ref(t.user),
    }


def _assignment_dict(a) -> dict:
    return {
        'id': a.pk,
        'baseId': a.base.code,
        'assetType': a.asset_type,
        'quantity': a.quantity,
        'type': a.kind,
        'assignedTo': a.assigned_to,
        'date': a.timestamp.isoformat(),
        'user': _user_ref(a.user),
    }


def _log_dict(entry) -> dict:
    return {
        'id': entry.pk,
        'action': entry.action,
        'userId': entry.user_id,
        'details': entry.details,
        'timestamp': entry.timestamp.isoformat(),
    }


# =========================================================================
# DASHBOARD
# =========================================================================

@require_GET
@require_role('DASHBOARD_ROLES')
def dashboard(request, context):
    """GET ?startDate=YYYY-MM-DD&endDate=YYYY-MM-DD&assetType=Rifle"""
    try:
        rows = Assets.dashboard(
            context.base,
            start_date=request.GET.get('startDate'),
            end_date=request.GET.get('endDate'),
            asset_type=request.GET.get('assetType'),
        )
    except ArmoryError as exc:
        return _error(exc)

    return JsonResponse({'dashboard': [row.as_dict() for row in rows]})


# =========================================================================
# PURCHASES
# =========================================================================

@require_http_methods(['GET', 'POST'])
def purchases(request):
    if request.method == 'POST':
        return _create_purchase(request)
    return _list_purchases(request)


@require_role('LEDGER_READ_ROLES')
def _list_purchases(request, context):
    rows = Assets.list_purchases(context)
    return JsonResponse([_purchase_dict(p) for p in rows], safe=False)


@require_role('PURCHASE_ROLES')
def _create_purchase(request, context):
    try:
        body = _json_body(request)
        _require(body, 'assetType', 'quantity')
        Assets.purchase(
            _quantity(body['quantity']),
            _text(body, 'assetType'),
            _home_base(context),
            user=context.user,
        )
    except ArmoryError as exc:
        return _error(exc)

    return JsonResponse({'message': 'Purchase recorded successfully'}, status=201)


# =========================================================================
# TRANSFERS
# =========================================================================

@require_http_methods(['GET', 'POST'])
def transfers(request):
    if request.method == 'POST':
        return _create_transfer(request)
    return _list_transfers(request)


@require_role('LEDGER_READ_ROLES')
def _list_transfers(request, context):
    rows = Assets.list_transfers(context)
    return JsonResponse([_transfer_dict(t) for t in rows], safe=False)


@require_role('TRANSFER_ROLES')
def _create_transfer(request, context):
    try:
        body = _json_body(request)
        _require(body, 'toBaseId', 'assetType', 'quantity')
        to_base = Assets.get_base(_text(body, 'toBaseId'))
        if to_base is None:
            raise ArmoryError('UNKNOWN_BASE', base=body['toBaseId'])

        Assets.transfer(
            _quantity(body['quantity']),
            _text(body, 'assetType'),
            _home_base(context),
            to_base,
            user=context.user,
        )
    except ArmoryError as exc:
        return _error(exc)

    return JsonResponse({'message': 'Transfer successful'}, status=200)


# =========================================================================
# ASSIGNMENTS
# =========================================================================

@require_http_methods(['GET', 'POST'])
def assignments(request):
    if request.method == 'POST':
        return _create_assignment(request)
    return _list_assignments(request)


@require_role('LEDGER_READ_ROLES')
def _list_assignments(request, context):
    rows = Assets.list_assignments(context)
    return JsonResponse([_assignment_dict(a) for a in rows], safe=False)


@require_role('ASSIGNMENT_ROLES')
def _create_assignment(request, context):
    try:
        body = _json_body(request)
        _require(body, 'assetType', 'quantity', 'assignedTo')
        assignment = Assets.assign(
            _quantity(body['quantity']),
            _text(body, 'assetType'),
            _home_base(context),
            assigned_to=_text(body, 'assignedTo'),
            kind=body.get('type') or AssignmentKind.ASSIGNED,
            user=context.user,
        )
    except ArmoryError as exc:
        return _error(exc)

    message = 'Asset expended' if assignment.is_expended else 'Asset assigned'
    return JsonResponse({'message': message}, status=201)


# =========================================================================
# AUDIT LOG
# =========================================================================

@require_GET
@require_role('AUDIT_LOG_ROLES')
def logs(request, context):
    return JsonResponse([_log_dict(e) for e in Assets.list_audit_logs()], safe=False)
