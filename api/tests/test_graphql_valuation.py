"""Integration tests for GraphQL measure discovery and calculation queries."""

from fastapi.testclient import TestClient

from app.main import app


client = TestClient(app)

FX_TRADE = """
  trade: {
    tradeId: "FX-1"
    tradeDate: "2015-06-01"
    fxSingle: {
      baseCurrency: "GBP"
      baseAmount: 1000
      counterCurrency: "USD"
      counterAmount: -1600
      paymentDate: "2015-12-01"
    }
  }
"""

GBP_USD_CURVES = """
  discountCurves: [
    { currency: "GBP", curve: { name: "GBP-DSC", pillars: [0.5, 1.0], zeroRatesCc: [0.01, 0.012] } }
    { currency: "USD", curve: { name: "USD-DSC", pillars: [0.5, 1.0], zeroRatesCc: [0.02, 0.022] } }
  ]
"""

FUTURE_INDEX = '{ name: "GBP-LIBOR-3M", currency: "GBP", tenorMonths: 3 }'


def _post(query: str) -> dict:
    response = client.post("/graphql", json={"query": query})
    assert response.status_code == 200
    return response.json()


def test_health():
    """Health endpoint answers ok."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_configured_measures_fx():
    """An FX trade offers all six FX measures."""
    data = _post(f"query {{ configuredMeasures({FX_TRADE}) }}")
    assert "errors" not in data
    assert data["data"]["configuredMeasures"] == [
        "BUCKETED_PV01",
        "CURRENCY_EXPOSURE",
        "FORWARD_FX_RATE",
        "PAR_SPREAD",
        "PRESENT_VALUE",
        "PV01",
    ]


def test_configured_measures_future_without_price():
    """A future without a trade price offers risk and forward rate only."""
    query = f"""
    query {{
      configuredMeasures(trade: {{
        iborFuture: {{
          currency: "GBP"
          notional: 1000000
          accrualFactor: 0.25
          lastTradeDate: "2015-09-16"
          index: {FUTURE_INDEX}
          quantity: 10
        }}
      }})
    }}
    """
    data = _post(query)
    assert "errors" not in data
    assert data["data"]["configuredMeasures"] == ["BUCKETED_PV01", "FORWARD_RATE", "PV01"]


def test_calculate_fx_present_value_per_scenario():
    """PV is reported in GBP per scenario, each converted at its own spot rate."""
    query = f"""
    query {{
      calculate(
        {FX_TRADE}
        market: {{
          valuationDate: "2015-06-01"
          scenarios: [
            {{ {GBP_USD_CURVES} fxRates: [{{ pair: "GBP/USD", rate: 1.5 }}] }}
            {{ {GBP_USD_CURVES} fxRates: [{{ pair: "GBPUSD", rate: 1.7 }}] }}
          ]
        }}
        measures: ["PRESENT_VALUE", "ForwardFxRate", "FORWARD_RATE"]
      ) {{
        measure
        supported
        reportingCurrency
        values {{ scenario amount {{ currency amount }} rate }}
      }}
    }}
    """
    data = _post(query)
    assert "errors" not in data
    pv, forward, unsupported = data["data"]["calculate"]
    assert pv["measure"] == "PRESENT_VALUE"
    assert pv["reportingCurrency"] == "GBP"
    assert [v["scenario"] for v in pv["values"]] == [0, 1]
    assert all(v["amount"]["currency"] == "GBP" for v in pv["values"])
    # Receive GBP 1000, pay USD 1600: worth less when GBP is cheaper in USD.
    assert pv["values"][0]["amount"]["amount"] < 0 < pv["values"][1]["amount"]["amount"]
    assert forward["measure"] == "FORWARD_FX_RATE"
    assert 1.5 < forward["values"][0]["rate"] < forward["values"][1]["rate"]
    assert unsupported == {
        "measure": "FORWARD_RATE",
        "supported": False,
        "reportingCurrency": None,
        "values": [],
    }


def test_calculate_unconverted_amounts():
    """With convert false the PV is returned per currency."""
    query = f"""
    query {{
      calculate(
        {FX_TRADE}
        market: {{ valuationDate: "2015-06-01", scenarios: [{{ {GBP_USD_CURVES} }}] }}
        measures: ["PRESENT_VALUE"]
        convert: false
      ) {{
        reportingCurrency
        values {{ amounts {{ currency amount }} }}
      }}
    }}
    """
    data = _post(query)
    assert "errors" not in data
    result = data["data"]["calculate"][0]
    assert result["reportingCurrency"] is None
    amounts = result["values"][0]["amounts"]
    assert [a["currency"] for a in amounts] == ["GBP", "USD"]
    assert 0 < amounts[0]["amount"] < 1000
    assert -1600 < amounts[1]["amount"] < 0


def test_calculate_future_with_fixings():
    """A future whose fixing date has passed uses the published fixing."""
    query = f"""
    query {{
      calculate(
        trade: {{
          iborFuture: {{
            currency: "GBP"
            notional: 1000000
            accrualFactor: 0.25
            lastTradeDate: "2015-05-29"
            index: {FUTURE_INDEX}
            quantity: 10
            tradePrice: 0.99
          }}
        }}
        market: {{
          valuationDate: "2015-06-01"
          scenarios: [{{
            discountCurves: []
            indexCurves: [{{
              index: {FUTURE_INDEX}
              curve: {{ name: "GBP-L3M", pillars: [0.25, 1.0], zeroRatesCc: [0.005, 0.008] }}
            }}]
            fixings: [{{ index: "GBP-LIBOR-3M", fixingDate: "2015-05-29", value: 0.0052 }}]
          }}]
        }}
        measures: ["FORWARD_RATE", "PAR_SPREAD", "PRESENT_VALUE"]
      ) {{
        measure
        values {{ amount {{ currency amount }} rate }}
      }}
    }}
    """
    data = _post(query)
    assert "errors" not in data
    rate, spread, pv = data["data"]["calculate"]
    assert abs(rate["values"][0]["rate"] - 0.0052) < 1e-12
    assert abs(spread["values"][0]["rate"] - (1 - 0.0052 - 0.99)) < 1e-12
    expected_pv = (1 - 0.0052 - 0.99) * 1_000_000 * 0.25 * 10
    assert abs(pv["values"][0]["amount"]["amount"] - expected_pv) < 1e-6


def test_calculate_missing_curve_returns_error():
    """A scenario without a declared curve surfaces a market data error."""
    query = f"""
    query {{
      calculate(
        {FX_TRADE}
        market: {{
          valuationDate: "2015-06-01"
          scenarios: [{{
            discountCurves: [
              {{ currency: "GBP", curve: {{ name: "GBP-DSC", pillars: [1.0], zeroRatesCc: [0.01] }} }}
            ]
          }}]
        }}
        measures: ["PRESENT_VALUE"]
      ) {{ measure }}
    }}
    """
    data = _post(query)
    assert "errors" in data
    assert any("DiscountFactors[USD]" in e["message"] for e in data["errors"])


def test_calculate_missing_fx_rate_returns_error():
    """Reporting in a currency without an FX rate is an error, not a parity conversion."""
    query = f"""
    query {{
      calculate(
        {FX_TRADE}
        market: {{ valuationDate: "2015-06-01", scenarios: [{{ {GBP_USD_CURVES} }}] }}
        measures: ["PRESENT_VALUE"]
        reportingCurrency: "EUR"
      ) {{ measure }}
    }}
    """
    data = _post(query)
    assert "errors" in data
    assert any("No FX rate" in e["message"] for e in data["errors"])


def test_unknown_measure_returns_error():
    """Measure names are validated."""
    query = f"""
    query {{
      calculate(
        {FX_TRADE}
        market: {{ valuationDate: "2015-06-01", scenarios: [{{ {GBP_USD_CURVES} }}] }}
        measures: ["VEGA"]
      ) {{ measure }}
    }}
    """
    data = _post(query)
    assert "errors" in data
    assert any("Unknown measure" in e["message"] for e in data["errors"])


def test_trade_needs_exactly_one_product():
    """A trade with no product is rejected."""
    data = _post('query { configuredMeasures(trade: { tradeId: "EMPTY" }) }')
    assert "errors" in data
    assert any("exactly one" in e["message"] for e in data["errors"])


def test_version():
    """Version query answers."""
    data = _post("query { version }")
    assert data["data"]["version"] == "0.1.0"
