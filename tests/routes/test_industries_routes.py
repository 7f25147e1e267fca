"""Tests for /industries — list grouping, detail, create, company links."""

from biztime.models.industry_model import companies_industries


def _industry(client, code, name):
    response = client.post("/industries", json={"code": code, "industry_name": name})
    assert response.status_code == 201
    return response.json()["industry"]


def test_create_industry(client):
    response = client.post("/industries", json={"code": "acct", "industry_name": "Accounting"})
    assert response.status_code == 201
    assert response.json() == {"industry": {"code": "acct", "industry_name": "Accounting"}}


def test_create_duplicate_industry_returns_500(client):
    _industry(client, "acct", "Accounting")
    response = client.post("/industries", json={"code": "acct", "industry_name": "Other"})
    assert response.status_code == 500
    assert response.json()["error"]["status"] == 500


def test_list_industries_groups_company_codes(client, acme):
    client.post("/companies", json={"code": "ibm", "name": "IBM", "description": None})
    _industry(client, "acct", "Accounting")
    _industry(client, "tech", "Technology")
    client.post("/industries/tech/companies", json={"companyCode": "ibm"})
    client.post("/industries/tech/companies", json={"companyCode": "acme"})

    response = client.get("/industries")
    assert response.status_code == 200
    assert response.json() == [
        {"code": "acct", "companyCodes": []},
        {"code": "tech", "companyCodes": ["acme", "ibm"]},
    ]


def test_get_industry_lists_companies(client, acme):
    _industry(client, "tech", "Technology")
    client.post("/industries/tech/companies", json={"companyCode": "acme"})

    response = client.get("/industries/tech")
    assert response.status_code == 200
    assert response.json() == {
        "industry": {"code": "tech", "industry_name": "Technology", "companies": ["acme"]},
    }


def test_get_industry_without_companies(client):
    _industry(client, "acct", "Accounting")
    response = client.get("/industries/acct")
    assert response.json()["industry"]["companies"] == []


def test_get_unknown_industry_returns_404(client):
    response = client.get("/industries/nope")
    assert response.status_code == 404
    assert response.json() == {
        "error": {"message": "Can't find industry with code of nope", "status": 404},
    }


def test_associate_company_with_industry(client, acme):
    _industry(client, "tech", "Technology")
    response = client.post("/industries/tech/companies", json={"companyCode": "acme"})
    assert response.status_code == 200
    assert response.json() == {"industry": {"comp_code": "acme", "industries_code": "tech"}}


def test_associate_unknown_company_returns_404_without_insert(client, db):
    _industry(client, "tech", "Technology")

    response = client.post("/industries/tech/companies", json={"companyCode": "ghost"})
    assert response.status_code == 404
    assert response.json() == {
        "error": {"message": "Can't find company with code of ghost", "status": 404},
    }
    assert db.query(companies_industries).count() == 0


def test_associate_with_unknown_industry_returns_404(client, acme, db):
    response = client.post("/industries/nope/companies", json={"companyCode": "acme"})
    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Can't find industry with code of nope"
    assert db.query(companies_industries).count() == 0


def test_associate_twice_returns_500(client, acme):
    _industry(client, "tech", "Technology")
    client.post("/industries/tech/companies", json={"companyCode": "acme"})
    response = client.post("/industries/tech/companies", json={"companyCode": "acme"})
    assert response.status_code == 500
