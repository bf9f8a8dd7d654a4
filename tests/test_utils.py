from decimal import Decimal

from stock_analytics.utils import format_currency, load_table


def test_format_currency():
    assert format_currency(Decimal("1050")) == "₹1,050.00"
    assert format_currency(Decimal("1234567.555")) == "₹1,234,567.56"
    assert format_currency(0, symbol="$", digits=0) == "$0"
    assert format_currency(Decimal("-5")) == "-₹5.00"


def test_load_table_csv_keeps_text(tmp_path):
    path = tmp_path / "products.csv"
    path.write_text("_id,sku,quantity\n1,007,5\n", encoding="utf-8")
    df = load_table(path)
    assert df.to_dict("records") == [{"_id": "1", "sku": "007", "quantity": "5"}]


def test_load_table_json(tmp_path):
    path = tmp_path / "products.json"
    path.write_text('[{"_id": "a", "quantity": 3}]', encoding="utf-8")
    df = load_table(path)
    assert df.to_dict("records") == [{"_id": "a", "quantity": 3}]


def test_load_table_missing_file(tmp_path):
    assert load_table(tmp_path / "nope.csv") is None


def test_load_table_latin1_fallback(tmp_path):
    path = tmp_path / "products.csv"
    path.write_bytes("_id,name\n1,Caf\xe9\n".encode("latin-1"))
    df = load_table(path)
    assert df.loc[0, "name"] == "Café"
