from datetime import datetime, timedelta

from app.main import app

API = "/api/v1"


def month_start(moment: datetime, months_back: int = 0) -> datetime:
    year, month = moment.year, moment.month - months_back
    while month < 1:
        month += 12
        year -= 1
    return datetime(year, month, 1, 12, 0)


def add_transaction(client, headers, tx_type, amount, category, when=None, **extra):
    payload = {"type": tx_type, "amount": amount, "category": category, **extra}
    if when is not None:
        payload["date"] = when.isoformat()
    response = client.post(f"{API}/transactions", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_root_and_health(client) -> None:
    root = client.get("/")
    assert root.status_code == 200
    assert f"{API}/transactions" in root.json()["endpoints"]

    health = client.get("/api/health")
    assert health.status_code == 200
    body = health.json()
    assert body["status"] == "ok"
    assert body["database"] == "connected"
    assert body["database_checked_at"] is not None


def test_requests_without_token_are_rejected(client) -> None:
    assert client.get(f"{API}/transactions").status_code == 401
    assert client.get(f"{API}/users/me").status_code == 401

    response = client.get(f"{API}/goals", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token"


def test_register_login_and_profile(client, register_user, password) -> None:
    headers = register_user(email="asha.rao@mail.com")

    me = client.get(f"{API}/users/me", headers=headers)
    assert me.status_code == 200
    assert me.json()["email"] == "asha.rao@mail.com"
    assert me.json()["currency"] == "INR"
    assert me.json()["name"] == "Test User"

    duplicate = client.post(
        f"{API}/auth/register",
        json={"email": "asha.rao@mail.com", "password": password, "name": "Again"},
    )
    assert duplicate.status_code == 400

    bad_login = client.post(f"{API}/auth/jwt/login", data={"username": "asha.rao@mail.com", "password": "wrong-one"})
    assert bad_login.status_code == 400


def test_register_rejects_short_password(client) -> None:
    response = client.post(
        f"{API}/auth/register",
        json={"email": "short.pw@mail.com", "password": "abc", "name": "Short"},
    )
    assert response.status_code == 400


def test_welcome_notification_on_register(client, auth_headers) -> None:
    response = client.get(f"{API}/notifications", headers=auth_headers)
    assert response.status_code == 200
    notifications = response.json()
    assert len(notifications) == 1
    assert notifications[0]["type"] == "system"
    assert notifications[0]["is_read"] is False


def test_profile_update(client, auth_headers) -> None:
    empty = client.patch(f"{API}/users/me", json={}, headers=auth_headers)
    assert empty.status_code == 400
    assert empty.json()["detail"] == "No fields provided for update"

    updated = client.patch(
        f"{API}/users/me",
        json={"name": "Ravi", "currency": "usd", "theme_mode": "dark"},
        headers=auth_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["name"] == "Ravi"
    assert updated.json()["currency"] == "USD"
    assert updated.json()["theme_mode"] == "dark"

    unsupported = client.patch(f"{API}/users/me", json={"currency": "XYZ"}, headers=auth_headers)
    assert unsupported.status_code == 400

    bad_theme = client.patch(f"{API}/users/me", json={"theme_mode": "neon"}, headers=auth_headers)
    assert bad_theme.status_code == 400
    assert bad_theme.json()["detail"] == "Validation Error"

    not_allowed = client.patch(f"{API}/users/me", json={"is_superuser": True}, headers=auth_headers)
    assert not_allowed.status_code == 400
    assert client.get(f"{API}/users/me", headers=auth_headers).json()["is_superuser"] is False


def test_change_password(client, register_user, password) -> None:
    email = "pw.change@mail.com"
    headers = register_user(email=email)
    url = f"{API}/users/me/password"

    wrong = client.put(url, json={"current_password": "nope-nope", "new_password": "Brand-New-1"}, headers=headers)
    assert wrong.status_code == 400
    assert wrong.json()["detail"] == "Current password is incorrect"

    same = client.put(url, json={"current_password": password, "new_password": password}, headers=headers)
    assert same.status_code == 400

    too_short = client.put(url, json={"current_password": password, "new_password": "abc"}, headers=headers)
    assert too_short.status_code == 400

    ok = client.put(url, json={"current_password": password, "new_password": "Brand-New-1"}, headers=headers)
    assert ok.status_code == 200
    assert ok.json() == {"message": "Password updated successfully"}

    login = client.post(f"{API}/auth/jwt/login", data={"username": email, "password": "Brand-New-1"})
    assert login.status_code == 200


def test_transaction_crud(client, auth_headers) -> None:
    created = add_transaction(client, auth_headers, "expense", 250.5, "  Food  ", name="Lunch")
    assert created["category"] == "Food"
    assert created["status"] == "Completed"
    tx_url = f"{API}/transactions/{created['id']}"

    fetched = client.get(tx_url, headers=auth_headers)
    assert fetched.status_code == 200
    assert fetched.json()["amount"] == 250.5

    updated = client.put(tx_url, json={"amount": 300, "description": "Team lunch"}, headers=auth_headers)
    assert updated.status_code == 200
    assert updated.json()["amount"] == 300
    assert updated.json()["category"] == "Food"
    assert updated.json()["description"] == "Team lunch"

    deleted = client.delete(tx_url, headers=auth_headers)
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Transaction deleted"}
    assert client.get(tx_url, headers=auth_headers).status_code == 404


def test_transaction_validation_errors(client, auth_headers) -> None:
    url = f"{API}/transactions"

    bad_type = client.post(url, json={"type": "gift", "amount": 10, "category": "Food"}, headers=auth_headers)
    assert bad_type.status_code == 400
    assert bad_type.json()["detail"] == "Validation Error"
    assert bad_type.json()["errors"]

    negative = client.post(url, json={"type": "expense", "amount": -1, "category": "Food"}, headers=auth_headers)
    assert negative.status_code == 400

    blank = client.post(url, json={"type": "expense", "amount": 1, "category": "   "}, headers=auth_headers)
    assert blank.status_code == 400

    created = add_transaction(client, auth_headers, "expense", 10, "Food")
    owner_change = client.put(
        f"{url}/{created['id']}",
        json={"user_id": created["id"]},
        headers=auth_headers,
    )
    assert owner_change.status_code == 400


def test_transaction_filters_and_order(client, auth_headers) -> None:
    now = datetime.now()
    add_transaction(client, auth_headers, "income", 50000, "Salary", now - timedelta(days=3))
    add_transaction(client, auth_headers, "expense", 15000, "Housing", now - timedelta(days=2))
    add_transaction(client, auth_headers, "expense", 5000, "Food", now - timedelta(days=1))

    everything = client.get(f"{API}/transactions", headers=auth_headers).json()
    assert [tx["category"] for tx in everything] == ["Food", "Housing", "Salary"]

    expenses = client.get(f"{API}/transactions", params={"type": "expense"}, headers=auth_headers).json()
    assert {tx["category"] for tx in expenses} == {"Food", "Housing"}

    food = client.get(f"{API}/transactions", params={"category": "Food"}, headers=auth_headers).json()
    assert len(food) == 1

    recent = client.get(
        f"{API}/transactions",
        params={"start_date": (now - timedelta(days=2, hours=1)).isoformat()},
        headers=auth_headers,
    ).json()
    assert len(recent) == 2


def test_records_are_private_to_their_owner(client, register_user) -> None:
    owner = register_user()
    intruder = register_user()

    tx = add_transaction(client, owner, "expense", 99, "Food")
    goal = client.post(
        f"{API}/goals",
        json={"name": "Bike", "target_amount": 1000, "category": "Vehicle"},
        headers=owner,
    ).json()

    assert client.get(f"{API}/transactions/{tx['id']}", headers=intruder).status_code == 404
    assert client.put(f"{API}/transactions/{tx['id']}", json={"amount": 1}, headers=intruder).status_code == 404
    assert client.delete(f"{API}/transactions/{tx['id']}", headers=intruder).status_code == 404
    assert client.put(f"{API}/goals/{goal['id']}/add-funds", json={"amount": 5}, headers=intruder).status_code == 404
    assert client.delete(f"{API}/goals/{goal['id']}", headers=intruder).status_code == 404
    assert client.get(f"{API}/transactions", headers=intruder).json() == []

    assert client.get(f"{API}/transactions/{tx['id']}", headers=owner).json()["amount"] == 99


def test_reports_summary_categories_and_monthly(client, auth_headers) -> None:
    now = datetime.now()
    this_month = month_start(now)
    add_transaction(client, auth_headers, "income", 50000, "Salary", this_month)
    add_transaction(client, auth_headers, "expense", 15000, "Housing", this_month)
    add_transaction(client, auth_headers, "expense", 5000, "Food", this_month)
    add_transaction(client, auth_headers, "expense", 2000, "Food", month_start(now, 2))

    summary = client.get(f"{API}/reports/summary", headers=auth_headers).json()
    assert summary["income"] == 50000
    assert summary["expenses"] == 22000
    assert summary["balance"] == 28000
    assert summary["category_breakdown"] == {"Housing": 15000, "Food": 7000}
    assert summary["transaction_count"] == 4

    ranged = client.get(
        f"{API}/reports/summary",
        params={"start_date": datetime(this_month.year, this_month.month, 1).isoformat()},
        headers=auth_headers,
    ).json()
    assert ranged["expenses"] == 20000

    categories = client.get(
        f"{API}/reports/categories",
        params={"month": this_month.strftime("%Y-%m")},
        headers=auth_headers,
    ).json()
    assert categories["total"] == 20000
    assert {row["category"]: row["percentage"] for row in categories["categories"]} == {"Housing": 75, "Food": 25}

    all_time = client.get(f"{API}/reports/categories", headers=auth_headers).json()
    assert all_time["total"] == 22000

    monthly = client.get(f"{API}/reports/monthly", headers=auth_headers).json()
    assert [entry["actual"] for entry in monthly] == [2000, 20000]
    assert monthly[-1]["label"] == this_month.strftime("%b'%y")
    assert all(entry["budget"] == 10000 for entry in monthly)

    one_month = client.get(f"{API}/reports/monthly", params={"months": 1}, headers=auth_headers).json()
    assert len(one_month) == 1


def test_report_parameter_validation(client, auth_headers) -> None:
    invalid_month = client.get(f"{API}/reports/categories", params={"month": "2026-13"}, headers=auth_headers)
    assert invalid_month.status_code == 400
    assert invalid_month.json()["detail"] == "Invalid month"

    bad_format = client.get(f"{API}/reports/categories", params={"month": "2026/10"}, headers=auth_headers)
    assert bad_format.status_code == 400

    for out_of_range in ("0000-05", "9999-12", "2026-00"):
        response = client.get(f"{API}/reports/categories", params={"month": out_of_range}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid month"

    too_many = client.get(f"{API}/reports/monthly", params={"months": 25}, headers=auth_headers)
    assert too_many.status_code == 400


def test_empty_reports(client, auth_headers) -> None:
    summary = client.get(f"{API}/reports/summary", headers=auth_headers).json()
    assert summary == {
        "income": 0,
        "expenses": 0,
        "balance": 0,
        "category_breakdown": {},
        "transaction_count": 0,
    }
    assert client.get(f"{API}/reports/monthly", headers=auth_headers).json() == []
    assert client.get(f"{API}/reports/categories", headers=auth_headers).json() == {"categories": [], "total": 0}


def test_goal_lifecycle_and_completion_notification(client, auth_headers) -> None:
    created = client.post(
        f"{API}/goals",
        json={"name": "Emergency Fund", "target_amount": 100000, "current_amount": 45000, "category": "Savings"},
        headers=auth_headers,
    )
    assert created.status_code == 201
    goal = created.json()
    assert goal["status"] == "active"
    assert goal["icon"]
    assert goal["deadline"]
    funds_url = f"{API}/goals/{goal['id']}/add-funds"

    completed = client.put(funds_url, json={"amount": 60000}, headers=auth_headers)
    assert completed.status_code == 200
    assert completed.json()["current_amount"] == 105000
    assert completed.json()["status"] == "completed"

    again = client.put(funds_url, json={"amount": 10}, headers=auth_headers)
    assert again.json()["current_amount"] == 105010
    assert again.json()["status"] == "completed"

    titles = [n["title"] for n in client.get(f"{API}/notifications", headers=auth_headers).json()]
    assert titles.count("Goal achieved!") == 1

    renamed = client.put(f"{API}/goals/{goal['id']}", json={"name": "Rainy Day"}, headers=auth_headers)
    assert renamed.json()["name"] == "Rainy Day"
    assert renamed.json()["current_amount"] == 105010

    deleted = client.delete(f"{API}/goals/{goal['id']}", headers=auth_headers)
    assert deleted.json() == {"message": "Goal deleted"}
    assert client.get(f"{API}/goals", headers=auth_headers).json() == []


def test_add_funds_rejects_bad_amounts(client, auth_headers) -> None:
    goal = client.post(
        f"{API}/goals",
        json={"name": "Vacation", "target_amount": 50000, "current_amount": 20000, "category": "Travel"},
        headers=auth_headers,
    ).json()
    funds_url = f"{API}/goals/{goal['id']}/add-funds"

    for amount in (0, -100):
        response = client.put(funds_url, json={"amount": amount}, headers=auth_headers)
        assert response.status_code == 400

    assert client.put(funds_url, json={}, headers=auth_headers).status_code == 400

    goals = client.get(f"{API}/goals", headers=auth_headers).json()
    assert goals[0]["current_amount"] == 20000
    assert goals[0]["status"] == "active"

    missing = client.put(
        f"{API}/goals/00000000-0000-0000-0000-000000000000/add-funds",
        json={"amount": 5},
        headers=auth_headers,
    )
    assert missing.status_code == 404


def test_two_deposits_and_cancelled_goal(client, auth_headers) -> None:
    goal = client.post(
        f"{API}/goals",
        json={"name": "Laptop", "target_amount": 1000, "current_amount": 200, "category": "Gadgets"},
        headers=auth_headers,
    ).json()
    funds_url = f"{API}/goals/{goal['id']}/add-funds"
    client.put(funds_url, json={"amount": 100}, headers=auth_headers)
    second = client.put(funds_url, json={"amount": 150}, headers=auth_headers).json()
    assert second["current_amount"] == 450
    assert second["status"] == "active"

    cancelled = client.put(f"{API}/goals/{goal['id']}", json={"status": "cancelled"}, headers=auth_headers)
    assert cancelled.json()["status"] == "cancelled"

    topped_up = client.put(funds_url, json={"amount": 1000}, headers=auth_headers).json()
    assert topped_up["current_amount"] == 1450
    assert topped_up["status"] == "cancelled"


def test_investments_and_rollup(client, auth_headers) -> None:
    url = f"{API}/investments"
    fund = client.post(
        url,
        json={"name": "Index fund", "type": "mutual_fund", "invested_amount": 10000, "current_value": 12000},
        headers=auth_headers,
    )
    assert fund.status_code == 201
    deposit = client.post(
        url,
        json={"name": "Bank FD", "type": "fd", "invested_amount": 50000},
        headers=auth_headers,
    ).json()
    assert deposit["current_value"] == 0

    listed = client.get(url, headers=auth_headers).json()
    assert len(listed) == 2
    only_fd = client.get(url, params={"type": "fd"}, headers=auth_headers).json()
    assert [inv["name"] for inv in only_fd] == ["Bank FD"]

    updated = client.put(f"{url}/{deposit['id']}", json={"current_value": 51000}, headers=auth_headers)
    assert updated.json()["current_value"] == 51000

    rollup = client.get(f"{API}/reports/investments", headers=auth_headers).json()
    assert rollup["total_invested"] == 60000
    assert rollup["total_current_value"] == 63000
    assert rollup["total_returns"] == 3000
    assert rollup["investment_count"] == 2
    assert rollup["by_type"]["mutual_fund"] == {"count": 1, "invested": 10000, "current_value": 12000}

    filtered = client.get(f"{API}/reports/investments", params={"type": "fd"}, headers=auth_headers).json()
    assert list(filtered["by_type"]) == ["fd"]

    assert client.post(url, json={"name": "X", "type": "lottery", "invested_amount": 1}, headers=auth_headers).status_code == 400

    deleted = client.delete(f"{url}/{deposit['id']}", headers=auth_headers)
    assert deleted.json() == {"message": "Investment deleted"}
    assert client.put(f"{url}/{deposit['id']}", json={"notes": "gone"}, headers=auth_headers).status_code == 404


def test_notifications_flow(client, auth_headers) -> None:
    url = f"{API}/notifications"

    seeded = client.post(f"{url}/seed", headers=auth_headers)
    assert seeded.status_code == 200
    assert seeded.json()["count"] == len(seeded.json()["notifications"])
    assert client.get(f"{url}/unread-count", headers=auth_headers).json() == {"count": 2}

    unread = client.get(url, params={"unread_only": True}, headers=auth_headers).json()
    assert len(unread) == 2
    read_one = client.put(f"{url}/{unread[0]['id']}/read", headers=auth_headers)
    assert read_one.json()["is_read"] is True
    assert client.get(f"{url}/unread-count", headers=auth_headers).json() == {"count": 1}

    created = client.post(
        url,
        json={"title": "Budget alert", "message": "Food spending is high", "type": "budget"},
        headers=auth_headers,
    )
    assert created.status_code == 201
    newest = client.get(url, params={"limit": 1}, headers=auth_headers).json()
    assert newest[0]["title"] == "Budget alert"

    marked = client.put(f"{url}/mark-all-read", headers=auth_headers).json()
    assert marked["count"] == 2
    assert client.get(f"{url}/unread-count", headers=auth_headers).json() == {"count": 0}

    assert client.delete(f"{url}/{created.json()['id']}", headers=auth_headers).status_code == 200
    assert client.delete(f"{url}/{created.json()['id']}", headers=auth_headers).status_code == 404

    cleared = client.delete(url, headers=auth_headers).json()
    assert cleared["count"] == seeded.json()["count"]
    assert client.get(url, headers=auth_headers).json() == []

    assert client.get(url, params={"limit": 51}, headers=auth_headers).status_code == 400


def test_seed_sample_data_runs_once(client, auth_headers) -> None:
    first = client.post(f"{API}/users/me/seed-data", headers=auth_headers).json()
    assert first["message"] == "Sample data created successfully"
    assert first["transactions"] == len(client.get(f"{API}/transactions", headers=auth_headers).json())
    assert first["goals"] == len(client.get(f"{API}/goals", headers=auth_headers).json())

    second = client.post(f"{API}/users/me/seed-data", headers=auth_headers).json()
    assert second == {"message": "Data already exists"}


def test_seed_endpoints_replace_existing_rows(client, auth_headers) -> None:
    add_transaction(client, auth_headers, "expense", 1, "Misc")
    seeded = client.post(f"{API}/transactions/seed", headers=auth_headers).json()
    transactions = client.get(f"{API}/transactions", headers=auth_headers).json()
    assert len(transactions) == seeded["count"]
    assert "Misc" not in {tx["category"] for tx in transactions}

    client.post(f"{API}/goals/seed", headers=auth_headers)
    reseeded = client.post(f"{API}/goals/seed", headers=auth_headers).json()
    assert len(client.get(f"{API}/goals", headers=auth_headers).json()) == reseeded["count"]


def test_business_routes_wait_for_database(client, auth_headers) -> None:
    readiness = app.state.readiness
    readiness.database_connected = False
    try:
        blocked = client.get(f"{API}/transactions", headers=auth_headers)
        assert blocked.status_code == 503
        assert client.get("/api/health").json()["database"] == "disconnected"
    finally:
        readiness.database_connected = True

    assert client.get(f"{API}/transactions", headers=auth_headers).status_code == 200


def test_logout_clears_cookie(client) -> None:
    response = client.post(f"{API}/auth/jwt/logout")
    assert response.status_code == 200
    assert response.json() == {"detail": "Successfully logged out"}


def test_offset_dates_are_stored_as_utc(client, auth_headers) -> None:
    url = f"{API}/transactions"
    shifted = client.post(
        url,
        json={"type": "expense", "amount": 700, "category": "Food", "date": "2026-03-01T03:30:00+05:30"},
        headers=auth_headers,
    )
    assert shifted.status_code == 201
    assert shifted.json()["date"] == "2026-02-28T22:00:00"

    zulu = client.post(
        url,
        json={"type": "expense", "amount": 300, "category": "Travel", "date": "2026-03-10T12:00:00.000Z"},
        headers=auth_headers,
    )
    assert zulu.status_code == 201
    assert zulu.json()["date"] == "2026-03-10T12:00:00"

    february = client.get(f"{API}/reports/categories", params={"month": "2026-02"}, headers=auth_headers).json()
    march = client.get(f"{API}/reports/categories", params={"month": "2026-03"}, headers=auth_headers).json()
    assert february["total"] == 700
    assert march["total"] == 300

    both = client.get(
        f"{API}/reports/summary",
        params={"start_date": "2026-02-28T21:00:00Z", "end_date": "2026-03-31T23:59:59Z"},
        headers=auth_headers,
    ).json()
    assert both["expenses"] == 1000

    after_shift = client.get(
        url,
        params={"start_date": "2026-03-01T05:00:00+05:30"},
        headers=auth_headers,
    ).json()
    assert [tx["category"] for tx in after_shift] == ["Travel"]


def test_offset_date_lands_in_utc_month_of_monthly_series(client, auth_headers) -> None:
    now = datetime.now()
    local_first = f"{now.year:04d}-{now.month:02d}-01T03:30:00+05:30"
    created = client.post(
        f"{API}/transactions",
        json={"type": "expense", "amount": 450, "category": "Food", "date": local_first},
        headers=auth_headers,
    )
    assert created.status_code == 201

    monthly = client.get(f"{API}/reports/monthly", headers=auth_headers).json()
    assert [entry["label"] for entry in monthly] == [month_start(now, 1).strftime("%b'%y")]
    assert monthly[0]["actual"] == 450
