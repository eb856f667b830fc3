import pytest

from bakso_utils.analytics import (
    FrequentItemset,
    association_type,
    cost_analysis,
    format_percent,
    format_rupiah,
    itemsets_to_dataframe,
    monthly_trend,
    overview,
    rules_to_dataframe,
    run_apriori,
    total_usage_by_ingredient,
    usage_frequency,
)
from bakso_utils.analytics.reporting import confidence_level, support_level


def test_overview(ingredients, records):
    totals = overview(ingredients, records)
    assert totals.ingredient_count == 3
    assert totals.record_count == 3
    assert totals.total_portions == 60
    assert totals.total_cost == pytest.approx(499600.0)
    assert totals.avg_cost_per_portion == pytest.approx(499600.0 / 60)


def test_overview_empty():
    totals = overview([], [])
    assert totals.total_portions == 0
    assert totals.avg_cost_per_portion == 0.0


def test_cost_analysis(ingredients):
    df = cost_analysis(ingredients)
    assert list(df.columns) == ["name", "cost_per_portion", "cost_per_unit"]
    assert df["name"].tolist() == ["Daging Sapi", "Kaldu Sapi", "Tepung Tapioka"]
    assert df["cost_per_portion"].tolist() == pytest.approx([6500.0, 2000.0, 240.0])


def test_usage_frequency(ingredients, records):
    df = usage_frequency(ingredients, records)
    assert df.to_dict("records") == [
        {"name": "Daging Sapi", "frequency": 3},
        {"name": "Tepung Tapioka", "frequency": 2},
        {"name": "Kaldu Sapi", "frequency": 2},
    ]


def test_usage_frequency_includes_unused(ingredients):
    df = usage_frequency(ingredients, [])
    assert df["frequency"].tolist() == [0, 0, 0]


def test_total_usage_by_ingredient(ingredients, records):
    df = total_usage_by_ingredient(ingredients, records)
    assert df["name"].tolist() == ["Kaldu Sapi", "Daging Sapi", "Tepung Tapioka"]
    assert df["total_used"].tolist() == pytest.approx([12.5, 3.0, 0.8])
    assert df["unit"].tolist() == ["liter", "kg", "kg"]


def test_total_usage_skips_unused(ingredients, records):
    df = total_usage_by_ingredient(ingredients, records[:1])
    assert df["name"].tolist() == ["Daging Sapi", "Tepung Tapioka"]


def test_monthly_trend(records):
    df = monthly_trend(records)
    assert df["month"].tolist() == ["2024-01", "2024-02"]
    assert df["portions"].tolist() == [30, 30]
    assert df["cost"].tolist() == pytest.approx([237400.0, 262200.0])
    assert df["avg_cost_per_portion"].tolist() == pytest.approx([237400.0 / 30, 8740.0])


def test_monthly_trend_empty():
    df = monthly_trend([])
    assert df.empty
    assert list(df.columns) == ["month", "portions", "cost", "avg_cost_per_portion"]


def test_sample_monthly_trend(sample_session):
    df = monthly_trend(sample_session.history.snapshot())
    assert df["month"].tolist() == ["2024-01", "2024-02", "2024-03"]
    assert df["portions"].tolist() == [180, 205, 235]
    assert df["cost"].sum() == pytest.approx(6825350.0)


@pytest.mark.parametrize(
    "value, expected",
    [
        (12500, "Rp 12.500"),
        (0, "Rp 0"),
        (1234567, "Rp 1.234.567"),
        (1234.5, "Rp 1.234,5"),
        (99.25, "Rp 99,25"),
        (-2500, "Rp -2.500"),
    ],
)
def test_format_rupiah(value, expected):
    assert format_rupiah(value) == expected


@pytest.mark.parametrize("value, expected", [(0.5, "50.0%"), (1, "100.0%"), (1 / 3, "33.3%")])
def test_format_percent(value, expected):
    assert format_percent(value) == expected


@pytest.mark.parametrize(
    "lift, expected", [(1.33, "positive"), (1.0, "independent"), (0.4, "negative"), (0.0, "negative")]
)
def test_association_type(lift, expected):
    assert association_type(lift) == expected


@pytest.mark.parametrize("support, expected", [(0.9, "high"), (0.7, "high"), (0.5, "medium"), (0.3, "low")])
def test_support_level(support, expected):
    assert support_level(support) == expected


def test_confidence_level():
    assert confidence_level(0.8) == "strong"
    assert confidence_level(0.79) == "moderate"


def test_itemsets_to_dataframe(ingredients):
    itemsets = [FrequentItemset(("beef",), 1.0), FrequentItemset(("beef", "ghost"), 0.5)]
    df = itemsets_to_dataframe(itemsets, ingredients)
    assert df["itemset"].tolist() == ["Daging Sapi", "Daging Sapi, Unknown"]
    assert df["size"].tolist() == [1, 2]
    assert df["support_pct"].tolist() == ["100.0%", "50.0%"]
    assert df["support_level"].tolist() == ["high", "medium"]


def test_rules_to_dataframe(ingredients, records):
    result = run_apriori(records, 0.5, 0.6)
    df = rules_to_dataframe(result.rules, ingredients)
    assert len(df) == result.rule_count
    first = df.iloc[0]
    assert first["confidence"] == pytest.approx(result.rules[0].confidence)
    assert set(df["association"]) <= {"positive", "independent", "negative"}


def test_empty_tables_keep_columns(ingredients):
    assert list(rules_to_dataframe([], ingredients).columns) == [
        "antecedent",
        "consequent",
        "support",
        "confidence",
        "lift",
        "confidence_level",
        "association",
    ]
    assert itemsets_to_dataframe([], ingredients).empty
