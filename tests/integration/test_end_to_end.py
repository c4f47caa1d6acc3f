from __future__ import annotations

import pytest

from salesqa.application.analysis.data_retriever import DataRetriever
from salesqa.application.analysis.intent_classifier import IntentClassifier
from salesqa.application.analysis.orchestrator import AnalysisOrchestrator
from salesqa.application.analysis.query_planner import QueryPlanner
from salesqa.application.analysis.response_composer import ResponseComposer
from salesqa.application.analysis.schemas import QueryPlan
from salesqa.domain.value_objects import ProductAnalysis


def test_top_products_by_profit(orchestrator):
    bundle = orchestrator.answer_question("show me top 5 products by profit")

    assert bundle.error is None
    assert "ORDER BY total_profit DESC" in bundle.sql
    assert "LIMIT 5" in bundle.sql
    assert "Your most profitable product is **Laptop** with a total profit of **$600.00**." in bundle.narrative
    rows = bundle.visualizations[1].payload.rows
    assert [row["product_name"] for row in rows] == ["Laptop", "Desk", "Headphones", "T-Shirt", "Novel"]


def test_intent_for_top_products_by_profit():
    assert IntentClassifier().classify("show me top 5 products by profit") == ProductAnalysis(metric="profit", limit=5)


def test_top_customers_by_revenue(orchestrator):
    bundle = orchestrator.answer_question("Who are our top 2 customers?")

    assert "## Top 2 Customers by Revenue" in bundle.narrative
    assert "Your top customer is **Alice Smith** with a total revenue of **$2,200.00**." in bundle.narrative
    rows = bundle.visualizations[1].payload.rows
    assert [row["customer_name"] for row in rows] == ["Alice Smith", "Dan Brown"]
    assert rows[0]["last_purchase_date"] == "2023-03-05"
    assert rows[0]["avg_order_value"] == "$1,100.00"


def test_monthly_revenue_trend(orchestrator):
    bundle = orchestrator.answer_question("show revenue by month")

    assert "The total revenue for all time was **$3,390.00**." in bundle.narrative
    assert "From 2023-01 to 2023-03, revenue has **increased by 6.3%**." in bundle.narrative
    chart = bundle.visualizations[0].payload
    assert chart.chart_type == "line"
    assert chart.labels == ["2023-01", "2023-02", "2023-03"]


def test_regional_distribution(orchestrator):
    bundle = orchestrator.answer_question("how do regions perform")

    assert "Your top performing region is **North** with a total revenue of **$2,200.00**." in bundle.narrative
    assert "- **North**: $2,200.00 (64.9%)" in bundle.narrative
    assert bundle.visualizations[0].payload.chart_type == "pie"
    assert [s.chart_type for s in bundle.suggestions] == ["map"]


def test_category_comparison(orchestrator):
    bundle = orchestrator.answer_question("compare electronics vs furniture")

    assert "Based on the analysis, **Electronics** has the highest revenue with **$2,300.00**." in bundle.narrative
    assert "- **Furniture** has increased by 100.0% from 2023-01 to 2023-03" in bundle.narrative
    chart = bundle.visualizations[0].payload
    assert chart.labels == ["2023-01", "2023-03"]
    assert [series.label for series in chart.series] == ["Electronics", "Furniture"]
    assert chart.series[0].values == [1200.0, 1100.0]


def test_general_overview(orchestrator):
    bundle = orchestrator.answer_question("How is the business doing?")

    assert "## Business Overview Analysis" in bundle.narrative
    assert "- Total orders: **5**" in bundle.narrative
    assert "- Order count has **remained stable**" in bundle.narrative
    assert "- Average Order Value (AOV): **$678.00**" in bundle.narrative


def test_relative_timeframe_with_old_data_is_empty_not_an_error(orchestrator):
    bundle = orchestrator.answer_question("revenue last month")

    assert bundle.error is None
    assert "No matching data was found" in bundle.narrative


def test_store_failure_is_reported(sales_connection, sales_repository):
    sales_connection.execute("DROP TABLE order_items")
    orchestrator = AnalysisOrchestrator(
        intent_classifier=IntentClassifier(),
        query_planner=QueryPlanner(),
        data_retriever=DataRetriever(repository=sales_repository),
        response_composer=ResponseComposer(),
    )

    bundle = orchestrator.answer_question("top products")

    assert bundle.error == "execution"
    assert bundle.narrative.startswith("I encountered an error when trying to analyze the data: ")
    assert bundle.visualizations == []


@pytest.mark.parametrize(
    "question",
    [
        "revenue by quarter this year",
        "sales by category",
        "top 3 customers by volume",
        "which clients placed the most orders",
        "best items by quantity",
        "profit by location",
        "compare north vs south by orders",
        "what is going on",
    ],
)
def test_generated_queries_run_against_the_store(sales_repository, question):
    planner = QueryPlanner()
    plan: QueryPlan = planner.create_plan(IntentClassifier().classify(question))
    sales_repository.execute(plan.sql)
