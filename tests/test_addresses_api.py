API = "/api/v1"


def list_addresses(client, customer_id):
    r = client.get(f"{API}/customers/{customer_id}/addresses")
    assert r.status_code == 200
    return r.json()


def test_scenario_single_address_then_cascade(client):
    r = client.post(f"{API}/customers", json={"first_name": "Jane", "last_name": "Doe", "phone_number": "9876543210"})
    assert r.json()["id"] == 1

    r = client.post(
        f"{API}/customers/1/addresses",
        json={"address_details": "221B Baker St", "city": "Mumbai", "state": "MH", "pin_code": "400001"},
    )
    assert r.status_code == 201
    assert r.json() == {"message": "Address created successfully", "id": 1}

    assert list_addresses(client, 1) == {
        "addresses": [
            {
                "id": 1,
                "customer_id": 1,
                "address_details": "221B Baker St",
                "city": "Mumbai",
                "state": "MH",
                "pin_code": "400001",
            }
        ],
        "hasOnlyOneAddress": True,
    }

    assert client.delete(f"{API}/customers/1").status_code == 200
    assert client.get(f"{API}/customers/1").status_code == 404
    r = client.get(f"{API}/addresses/1")
    assert r.status_code == 404
    assert r.json() == {"error": "Address not found"}


def test_has_only_one_address_follows_the_count(client, make_customer, make_address):
    customer_id = make_customer()
    assert list_addresses(client, customer_id)["hasOnlyOneAddress"] is False

    first = make_address(customer_id)
    assert list_addresses(client, customer_id)["hasOnlyOneAddress"] is True

    second = make_address(customer_id, city="Pune")
    body = list_addresses(client, customer_id)
    assert body["hasOnlyOneAddress"] is False
    assert [a["id"] for a in body["addresses"]] == [first, second]

    client.delete(f"{API}/addresses/{first}")
    assert list_addresses(client, customer_id)["hasOnlyOneAddress"] is True

    client.delete(f"{API}/addresses/{second}")
    assert list_addresses(client, customer_id) == {"addresses": [], "hasOnlyOneAddress": False}


def test_unknown_customer_has_no_addresses(client):
    assert list_addresses(client, 42) == {"addresses": [], "hasOnlyOneAddress": False}


def test_create_address_for_missing_customer(client):
    r = client.post(
        f"{API}/customers/7/addresses",
        json={"address_details": "221B Baker St", "city": "Mumbai", "state": "MH", "pin_code": "400001"},
    )
    assert r.status_code == 404
    assert r.json() == {"error": "Customer not found"}


def test_create_address_validation(client, make_customer):
    customer_id = make_customer()
    r = client.post(
        f"{API}/customers/{customer_id}/addresses",
        json={"address_details": "Flat", "city": "M", "state": "", "pin_code": "1"},
    )
    assert r.status_code == 400
    assert r.json() == {"error": "Address details are required and must be at least 5 characters"}
    assert list_addresses(client, customer_id)["addresses"] == []


def test_address_field_order_decides_the_message_regardless_of_json_types(client, make_customer):
    customer_id = make_customer()
    r = client.post(
        f"{API}/customers/{customer_id}/addresses",
        json={"address_details": "221B Baker St", "city": "M", "state": 27, "pin_code": 400001},
    )
    assert r.status_code == 400
    assert r.json() == {"error": "City is required and must be at least 2 characters"}

    r = client.post(
        f"{API}/customers/{customer_id}/addresses",
        json={"address_details": "221B Baker St", "city": "Mumbai", "state": "MH", "pin_code": 400001},
    )
    assert r.status_code == 400
    assert r.json()["error"].startswith("Pin code")


def test_address_text_is_trimmed(client, make_customer, make_address):
    customer_id = make_customer()
    address_id = make_address(customer_id, address_details="  12 MG Road  ", city=" Bengaluru ", state=" KA")
    r = client.get(f"{API}/addresses/{address_id}")
    assert r.status_code == 200
    assert r.json()["address_details"] == "12 MG Road"
    assert r.json()["city"] == "Bengaluru"
    assert r.json()["state"] == "KA"


def test_update_address(client, make_customer, make_address):
    customer_id = make_customer()
    address_id = make_address(customer_id)
    r = client.put(
        f"{API}/addresses/{address_id}",
        json={"address_details": "7 Park Street", "city": "Kolkata", "state": "WB", "pin_code": "700016"},
    )
    assert r.status_code == 200
    assert r.json() == {"message": "Address updated successfully"}

    body = client.get(f"{API}/addresses/{address_id}").json()
    assert body["city"] == "Kolkata"
    assert body["customer_id"] == customer_id


def test_update_address_errors(client, make_customer, make_address):
    payload = {"address_details": "7 Park Street", "city": "Kolkata", "state": "WB", "pin_code": "700016"}
    assert client.put(f"{API}/addresses/3", json=payload).status_code == 404

    address_id = make_address(make_customer())
    r = client.put(f"{API}/addresses/{address_id}", json={**payload, "pin_code": "7000"})
    assert r.status_code == 400
    assert r.json()["error"].startswith("Pin code")


def test_delete_missing_address(client):
    r = client.delete(f"{API}/addresses/3")
    assert r.status_code == 404


def test_search_addresses(client, make_customer, make_address):
    jane = make_customer(first_name="Jane", last_name="Doe", phone_number="9000000001")
    arjun = make_customer(first_name="Arjun", last_name="Mehta", phone_number="9000000002")
    make_address(jane, city="Mumbai", state="MH", pin_code="400001")
    make_address(jane, city="Pune", state="MH", pin_code="411001")
    make_address(arjun, city="Bengaluru", state="KA", pin_code="560038")
    make_address(arjun, city="Mysuru", state="KA", pin_code="570001")

    r = client.get(f"{API}/addresses", params={"state": "ka"})
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 2
    assert body["totalPages"] == 1
    assert [a["city"] for a in body["data"]] == ["Bengaluru", "Mysuru"]
    assert body["data"][0]["first_name"] == "Arjun"
    assert body["data"][0]["last_name"] == "Mehta"
    assert body["data"][0]["customer_id"] == arjun

    r = client.get(f"{API}/addresses", params={"state": "MH", "pin_code": "411"})
    assert [a["city"] for a in r.json()["data"]] == ["Pune"]

    r = client.get(f"{API}/addresses", params={"city": "u", "sortBy": "city", "sortOrder": "desc", "limit": 2})
    body = r.json()
    assert [a["city"] for a in body["data"]] == ["Pune", "Mysuru"]
    assert body["total"] == 4
    assert body["totalPages"] == 2

    r = client.get(f"{API}/addresses", params={"sortBy": "first_name"})
    assert [a["first_name"] for a in r.json()["data"]] == ["Arjun", "Arjun", "Jane", "Jane"]


def test_search_addresses_without_filters_pages_everything(client, make_customer, make_address):
    customer_id = make_customer()
    for i in range(5):
        make_address(customer_id, pin_code=f"50000{i}")

    total = 0
    for page in (1, 2, 3):
        body = client.get(f"{API}/addresses", params={"page": page, "limit": 2}).json()
        assert body["total"] == 5
        assert body["totalPages"] == 3
        total += len(body["data"])
    assert total == 5

    body = client.get(f"{API}/addresses", params={"page": 4, "limit": 2}).json()
    assert body["data"] == []
    assert body["total"] == 5


def test_search_addresses_rejects_bad_sort(client):
    r = client.get(f"{API}/addresses", params={"sortBy": "phone_number"})
    assert r.status_code == 400
    r = client.get(f"{API}/addresses", params={"page": -1})
    assert r.status_code == 400


def test_ids_beyond_integer_range_are_not_found(client):
    huge = 10**19
    payload = {"address_details": "221B Baker St", "city": "Mumbai", "state": "MH", "pin_code": "400001"}
    assert client.get(f"{API}/addresses/{huge}").status_code == 404
    assert client.put(f"{API}/addresses/{huge}", json=payload).status_code == 404
    assert client.delete(f"{API}/addresses/{-huge}").status_code == 404
    assert client.post(f"{API}/customers/{huge}/addresses", json=payload).status_code == 404
    assert list_addresses(client, huge) == {"addresses": [], "hasOnlyOneAddress": False}


def test_huge_page_number_in_address_search(client, make_customer, make_address):
    make_address(make_customer())
    body = client.get(f"{API}/addresses", params={"page": 10**19}).json()
    assert body["data"] == []
    assert body["total"] == 1
