"""
Products, suppliers and warehouses over HTTP: CRUD, stock routes,
error mapping and delete rules
"""


def test_product_crud(client, auth_headers, seeded):
    payload = {
        'name': 'Sprocket',
        'sku': 'SPR-001',
        'description': 'Twelve tooth sprocket',
        'category': 'Hardware',
        'price': 3.35,
        'stock_quantity': 12,
        'min_stock_level': 4,
        'warehouse_id': seeded['warehouse_id'],
    }
    response = client.post('/api/products', json=payload, headers=auth_headers)
    assert response.status_code == 201, response.get_json()
    created = response.get_json()
    assert created['price'] == '3.35', "Money is serialized as an exact decimal string"
    assert created['is_low_stock'] is False
    assert created['warehouse_name'] == 'Central'

    response = client.put(f"/api/products/{created['id']}", json={'price': '4.00', 'min_stock_level': 20},
                          headers=auth_headers)
    assert response.status_code == 200
    assert response.get_json()['price'] == '4.00'
    assert response.get_json()['is_low_stock'] is True

    response = client.get('/api/products/sku/SPR-001', headers=auth_headers)
    assert response.get_json()['id'] == created['id']

    response = client.delete(f"/api/products/{created['id']}", headers=auth_headers)
    assert response.status_code == 204
    response = client.get(f"/api/products/{created['id']}", headers=auth_headers)
    assert response.status_code == 404


def test_product_validation(client, auth_headers, seeded):
    base = {'name': 'Thing', 'sku': 'THING', 'price': '1.00', 'warehouse_id': seeded['warehouse_id']}

    for bad in ({'price': 0}, {'price': 'abc'}, {'stock_quantity': -1}, {'min_stock_level': -2}, {'name': ''}):
        response = client.post('/api/products', json=dict(base, **bad), headers=auth_headers)
        assert response.status_code == 400, f"{bad} should be rejected"

    response = client.post('/api/products', json=dict(base, warehouse_id=999), headers=auth_headers)
    assert response.status_code == 404

    response = client.post('/api/products', json=dict(base, sku='WID-001'), headers=auth_headers)
    assert response.status_code == 409


def test_stock_routes(client, auth_headers, seeded):
    widget = seeded['widget_id']

    response = client.put(f'/api/products/{widget}/reduce-stock?quantity=10', headers=auth_headers)
    assert response.status_code == 200
    assert response.get_json()['stock_quantity'] == 40

    response = client.put(f'/api/products/{widget}/increase-stock', json={'quantity': 5}, headers=auth_headers)
    assert response.get_json()['stock_quantity'] == 45

    response = client.put(f'/api/products/{widget}/reduce-stock?quantity=46', headers=auth_headers)
    assert response.status_code == 400
    assert response.get_json()['error'] == 'Insufficient stock for product: Widget. Available: 45, Requested: 46'

    response = client.put(f'/api/products/{widget}/stock?quantity=-1', headers=auth_headers)
    assert response.status_code == 400

    response = client.put(f'/api/products/{widget}/stock?quantity=3', headers=auth_headers)
    assert response.get_json()['stock_quantity'] == 3
    assert response.get_json()['is_low_stock'] is True

    response = client.put('/api/products/999/increase-stock?quantity=1', headers=auth_headers)
    assert response.status_code == 404


def test_product_queries(client, auth_headers, seeded):
    response = client.get('/api/products/search?q=gad', headers=auth_headers)
    assert [p['sku'] for p in response.get_json()] == ['GAD-001']

    response = client.get('/api/products/low-stock', headers=auth_headers)
    assert [p['sku'] for p in response.get_json()] == ['GAD-001']

    response = client.get('/api/products/low-stock/alerts', headers=auth_headers)
    assert response.get_json() == [
        'LOW STOCK ALERT: Gadget (SKU: GAD-001) - Current Stock: 2, Min Level: 10'
    ]

    response = client.get('/api/products/categories', headers=auth_headers)
    assert response.get_json() == ['Electronics', 'Hardware']

    response = client.get('/api/products/analytics/inventory-value', headers=auth_headers)
    assert response.get_json() == {'total_inventory_value': '510.00'}

    response = client.get('/api/products/analytics/value-by-category', headers=auth_headers)
    assert response.get_json() == {'Electronics': '10.00', 'Hardware': '500.00'}

    response = client.get('/api/products/analytics/top-expensive?limit=1', headers=auth_headers)
    assert [p['sku'] for p in response.get_json()] == ['WID-001']


def test_product_in_an_order_cannot_be_deleted(client, auth_headers, seeded):
    client.post('/api/orders', json={
        'order_type': 'SALE',
        'items': [{'product_id': seeded['widget_id'], 'quantity': 1}],
    }, headers=auth_headers)

    response = client.delete(f"/api/products/{seeded['widget_id']}", headers=auth_headers)
    assert response.status_code == 409
    assert client.get(f"/api/products/{seeded['widget_id']}", headers=auth_headers).status_code == 200


def test_supplier_lifecycle(client, auth_headers, seeded):
    response = client.post('/api/suppliers', json={
        'name': 'Bolt Brothers', 'email': 'hi@bolts.example', 'address': '7 Quay, Portsmouth',
    }, headers=auth_headers)
    assert response.status_code == 201
    supplier = response.get_json()
    assert supplier['status'] == 'ACTIVE'

    response = client.post('/api/suppliers', json={'name': 'bolt brothers'}, headers=auth_headers)
    assert response.status_code == 409, "Supplier names are unique regardless of case"

    response = client.put(f"/api/suppliers/{supplier['id']}/suspend", headers=auth_headers)
    assert response.get_json()['status'] == 'SUSPENDED'

    response = client.get('/api/suppliers/alerts', headers=auth_headers)
    assert response.get_json() == ['SUPPLIER ALERT: Bolt Brothers is suspended - Contact: hi@bolts.example']

    response = client.get('/api/suppliers/status/suspended', headers=auth_headers)
    assert [s['name'] for s in response.get_json()] == ['Bolt Brothers']

    response = client.get('/api/suppliers/status/LOST', headers=auth_headers)
    assert response.status_code == 400

    response = client.put(f"/api/suppliers/{supplier['id']}/activate", headers=auth_headers)
    assert response.get_json()['status'] == 'ACTIVE'

    response = client.get('/api/suppliers/reliable', headers=auth_headers)
    assert [s['name'] for s in response.get_json()] == ['Acme Supply'], "Only suppliers with products are reliable"

    response = client.get('/api/suppliers/analytics/by-city', headers=auth_headers)
    assert response.get_json() == {'Portsmouth': ['Bolt Brothers'], 'Shelbyville': ['Acme Supply']}

    response = client.delete(f"/api/suppliers/{supplier['id']}", headers=auth_headers)
    assert response.status_code == 204


def test_referenced_supplier_cannot_be_deleted(client, auth_headers, seeded):
    response = client.delete(f"/api/suppliers/{seeded['supplier_id']}", headers=auth_headers)
    assert response.status_code == 409
    assert 'referenced by 1 product(s)' in response.get_json()['error']

    response = client.get(f"/api/products/{seeded['widget_id']}", headers=auth_headers)
    assert response.get_json()['supplier_id'] == seeded['supplier_id']


def test_warehouse_routes(client, auth_headers, seeded):
    response = client.post('/api/warehouses', json={'name': 'Overflow', 'location': 'Unit 9, Springfield'},
                           headers=auth_headers)
    assert response.status_code == 201
    overflow = response.get_json()

    response = client.post('/api/warehouses', json={'name': 'Overflow', 'location': 'Elsewhere'},
                           headers=auth_headers)
    assert response.status_code == 409

    response = client.get(f"/api/warehouses/{seeded['warehouse_id']}/utilization", headers=auth_headers)
    assert response.get_json() == {
        'warehouse_id': seeded['warehouse_id'],
        'warehouse_name': 'Central',
        'location': '1 Dock Road, Springfield',
        'total_products': 2,
        'low_stock_products': 1,
        'total_inventory_value': '510.00',
        'low_stock_percentage': 50.0,
    }

    response = client.get('/api/warehouses/alerts', headers=auth_headers)
    assert response.get_json() == ['WAREHOUSE ALERT: Central has 1 products with low stock']

    response = client.get('/api/warehouses/analytics/by-city', headers=auth_headers)
    assert response.get_json() == {'Springfield': ['Central', 'Overflow']}

    response = client.delete(f"/api/warehouses/{seeded['warehouse_id']}", headers=auth_headers)
    assert response.status_code == 409, "A warehouse holding products cannot be deleted"

    response = client.delete(f"/api/warehouses/{overflow['id']}", headers=auth_headers)
    assert response.status_code == 204


def test_unknown_route_and_method_are_json(client, auth_headers):
    response = client.get('/api/products/not-a-route/x', headers=auth_headers)
    assert response.status_code == 404
    assert 'error' in response.get_json()

    response = client.patch('/api/products', headers=auth_headers)
    assert response.status_code == 405


def test_out_of_range_numbers_are_rejected(client, auth_headers, seeded):
    base = {'name': 'Thing', 'sku': 'THING', 'price': '1.00', 'warehouse_id': seeded['warehouse_id']}

    for bad in ({'price': '1e30'}, {'price': '10000000000.00'}, {'stock_quantity': 10 ** 30},
                {'min_stock_level': 2 ** 31}, {'warehouse_id': 10 ** 30}):
        response = client.post('/api/products', json=dict(base, **bad), headers=auth_headers)
        assert response.status_code == 400, f"{bad} should be rejected"

    response = client.post('/api/products', json=dict(base, price='9999999999.99'), headers=auth_headers)
    assert response.status_code == 201, "The largest storable price is accepted"

    widget = seeded['widget_id']
    for action in ('reduce-stock', 'increase-stock', 'stock'):
        response = client.put(f'/api/products/{widget}/{action}?quantity={10 ** 30}', headers=auth_headers)
        assert response.status_code == 400, f"{action} with a huge quantity should be rejected"
    assert client.get(f'/api/products/{widget}', headers=auth_headers).get_json()['stock_quantity'] == 50


def test_search_wildcards_match_literally(client, auth_headers, seeded):
    client.post('/api/products', json={
        'name': '100% Cotton Rag', 'sku': 'RAG_01', 'price': '2.00', 'warehouse_id': seeded['warehouse_id'],
    }, headers=auth_headers)

    response = client.get('/api/products/search?q=%25', headers=auth_headers)
    assert [p['sku'] for p in response.get_json()] == ['RAG_01']

    response = client.get('/api/products/search?q=_', headers=auth_headers)
    assert [p['sku'] for p in response.get_json()] == ['RAG_01']

    response = client.get('/api/suppliers/search?q=%25', headers=auth_headers)
    assert response.get_json() == []

    response = client.get('/api/warehouses/search?q=_', headers=auth_headers)
    assert response.get_json() == []

    response = client.get('/api/warehouses/location?q=%25', headers=auth_headers)
    assert response.get_json() == []
