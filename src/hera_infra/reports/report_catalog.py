# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Static catalog of read-only report templates.

Every template is one SELECT scoped by ``organization_id = $1``. Caller
parameters are bound as ``$2..$n`` in the order of ``params``, never in the
order the caller sent them.

The catalog is a plain dict so tests and operators can inspect it; the
executor re-checks a template's safety on every call, so an entry mutated
after import is caught on its next run.
"""

from __future__ import annotations

from hera_infra.models import ModelReportDefinition

SALES_DAILY = ModelReportDefinition(
    report_code="HERA.REPORT.SALES.DAILY.v1",
    description="Daily sales totals per currency for a date range",
    sql_template=(
        "select date_trunc('day', t.transaction_date)::date as sales_date,"
        " t.transaction_currency_code as currency,"
        " count(*) as transaction_count,"
        " sum(t.total_amount) as total_amount"
        " from universal_transactions t"
        " where t.organization_id = $1"
        " and t.transaction_type = 'sale'"
        " and t.transaction_date >= $2::date"
        " and t.transaction_date < ($3::date + 1)"
        " group by 1, 2"
        " order by 1, 2"
    ),
    params=("from", "to"),
)

SALES_REVENUE_BY_STAFF = ModelReportDefinition(
    report_code="HERA.REPORT.SALES.REVENUE_BY_STAFF.v1",
    description="Line revenue per worker (line_data.worker_id) for a date range",
    sql_template=(
        "select l.line_data->>'worker_id' as worker_id,"
        " coalesce(w.entity_name, 'Unassigned') as worker_name,"
        " count(distinct t.id) as transaction_count,"
        " sum(l.line_amount) as revenue"
        " from universal_transaction_lines l"
        " join universal_transactions t"
        " on t.id = l.transaction_id and t.organization_id = l.organization_id"
        " left join core_entities w"
        " on w.id::text = l.line_data->>'worker_id'"
        " and w.organization_id = l.organization_id"
        " where l.organization_id = $1"
        " and t.transaction_type = 'sale'"
        " and t.transaction_date >= $2::date"
        " and t.transaction_date < ($3::date + 1)"
        " group by 1, 2"
        " order by revenue desc"
    ),
    params=("from", "to"),
)

FINANCE_AR_AGING = ModelReportDefinition(
    report_code="HERA.REPORT.FINANCE.AR_AGING.v1",
    description="Open receivables per customer bucketed by days past due",
    sql_template=(
        "select t.target_entity_id as customer_id,"
        " coalesce(c.entity_name, 'Unknown') as customer_name,"
        " t.transaction_currency_code as currency,"
        " sum(case when $2::date - coalesce(t.due_date, t.transaction_date)::date <= 0"
        " then t.total_amount else 0 end) as bucket_current,"
        " sum(case when $2::date - coalesce(t.due_date, t.transaction_date)::date"
        " between 1 and 30 then t.total_amount else 0 end) as bucket_1_30,"
        " sum(case when $2::date - coalesce(t.due_date, t.transaction_date)::date"
        " between 31 and 60 then t.total_amount else 0 end) as bucket_31_60,"
        " sum(case when $2::date - coalesce(t.due_date, t.transaction_date)::date"
        " between 61 and 90 then t.total_amount else 0 end) as bucket_61_90,"
        " sum(case when $2::date - coalesce(t.due_date, t.transaction_date)::date > 90"
        " then t.total_amount else 0 end) as bucket_90_plus,"
        " sum(t.total_amount) as total_open"
        " from universal_transactions t"
        " left join core_entities c"
        " on c.id = t.target_entity_id and c.organization_id = t.organization_id"
        " where t.organization_id = $1"
        " and t.transaction_type = 'invoice'"
        " and coalesce(t.transaction_status, 'open') not in ('paid', 'cancelled', 'void')"
        " and t.transaction_date < ($2::date + 1)"
        " group by 1, 2, 3"
        " order by total_open desc"
    ),
    params=("as_of",),
)

INVENTORY_ON_HAND = ModelReportDefinition(
    report_code="HERA.REPORT.INVENTORY.ON_HAND.v1",
    description="Quantity on hand per item as of a date (signed movement sum)",
    sql_template=(
        "select l.entity_id as item_id,"
        " coalesce(i.entity_name, 'Unknown') as item_name,"
        " sum(case"
        " when t.transaction_type in ('goods_receipt', 'purchase', 'stock_in', 'adjustment_in')"
        " then l.quantity"
        " when t.transaction_type in ('sale', 'goods_issue', 'stock_out', 'adjustment_out')"
        " then -l.quantity"
        " else 0 end) as quantity_on_hand"
        " from universal_transaction_lines l"
        " join universal_transactions t"
        " on t.id = l.transaction_id and t.organization_id = l.organization_id"
        " left join core_entities i"
        " on i.id = l.entity_id and i.organization_id = l.organization_id"
        " where l.organization_id = $1"
        " and l.entity_id is not null"
        " and t.transaction_date < ($2::date + 1)"
        " group by 1, 2"
        " order by 2"
    ),
    params=("as_of",),
)

SALES_TOP_ITEMS = ModelReportDefinition(
    report_code="HERA.REPORT.SALES.TOP_ITEMS.v1",
    description="Best-selling items by revenue for a date range",
    sql_template=(
        "select l.entity_id as item_id,"
        " coalesce(i.entity_name, max(l.description)) as item_name,"
        " sum(l.quantity) as quantity,"
        " sum(l.line_amount) as revenue"
        " from universal_transaction_lines l"
        " join universal_transactions t"
        " on t.id = l.transaction_id and t.organization_id = l.organization_id"
        " left join core_entities i"
        " on i.id = l.entity_id and i.organization_id = l.organization_id"
        " where l.organization_id = $1"
        " and t.transaction_type = 'sale'"
        " and t.transaction_date >= $2::date"
        " and t.transaction_date < ($3::date + 1)"
        " group by l.entity_id, i.entity_name"
        " order by revenue desc"
        " limit $4::int"
    ),
    params=("from", "to", "limit"),
)

REPORT_CATALOG: dict[str, ModelReportDefinition] = {
    definition.report_code: definition
    for definition in (
        SALES_DAILY,
        SALES_REVENUE_BY_STAFF,
        FINANCE_AR_AGING,
        INVENTORY_ON_HAND,
        SALES_TOP_ITEMS,
    )
}


def get_report(report_code: object) -> ModelReportDefinition | None:
    """Return the catalog entry for ``report_code``, or None."""
    if not isinstance(report_code, str):
        return None
    return REPORT_CATALOG.get(report_code)


def list_reports() -> list[dict[str, object]]:
    """Describe every report for tool listings."""
    return [
        {
            "report_code": definition.report_code,
            "description": definition.description,
            "params": list(definition.params),
        }
        for definition in sorted(REPORT_CATALOG.values(), key=lambda d: d.report_code)
    ]


__all__ = [
    "FINANCE_AR_AGING",
    "INVENTORY_ON_HAND",
    "REPORT_CATALOG",
    "SALES_DAILY",
    "SALES_REVENUE_BY_STAFF",
    "SALES_TOP_ITEMS",
    "get_report",
    "list_reports",
]
