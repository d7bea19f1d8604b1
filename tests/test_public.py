"""
Public site tests: room catalog, quotes, bookings, guest dashboard,
contact form and offers.
"""

import pytest


STAY = {'check_in': '2099-05-01', 'check_out': '2099-05-03'}


@pytest.fixture
def monsoon_offer(app):
    """An open-ended 20% offer capped at 100."""
    from models.promotion import create_promotion

    with app.app_context():
        return create_promotion({
            'title': 'Monsoon Escape',
            'promo_code': 'monsoon20',
            'discount_type': 'percentage',
            'discount_value': 20,
            'maximum_discount': 100,
        })


class TestRoomCatalog:
    """Tests for /rooms."""

    def test_guest_and_price_filters(self, client):
        response = client.get('/rooms?guests=5')
        names = {room['name'] for room in response.get_json()['data']}
        assert names == {'Presidential Villa', 'Family Suite'}

        response = client.get('/rooms?min_price=200&max_price=400')
        prices = sorted(room['price'] for room in response.get_json()['data'])
        assert prices == [210, 320, 380]

    def test_room_type_filter(self, client):
        response = client.get('/rooms', query_string={'room_type': 'Ocean Suite'})
        assert [room['id'] for room in response.get_json()['data']] == [2]

    def test_invalid_price(self, client):
        response = client.get('/rooms?min_price=cheap')
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Invalid min price'

    def test_unavailable_rooms_hidden_for_dates(self, app, client):
        from models.room import update_room

        with app.app_context():
            update_room(1, {'availability': False})

        assert client.get('/rooms').get_json()['count'] == 5
        response = client.get('/rooms?check_in=2099-05-01&check_out=2099-05-03')
        assert 1 not in [room['id'] for room in response.get_json()['data']]

    def test_details_include_gallery(self, app, client):
        from models.gallery import add_image

        with app.app_context():
            add_image(2, '/uploads/gallery/balcony.png', image_type='view')

        room = client.get('/rooms/2').get_json()['data']
        assert room['features']['has_ocean_view'] is True
        assert [image['image_url'] for image in room['gallery']] == ['/uploads/gallery/balcony.png']

    def test_missing_room(self, client):
        assert client.get('/rooms/99').status_code == 404


class TestQuote:
    """Tests for /rooms/<id>/quote."""

    def test_quote_with_add_ons(self, client):
        response = client.post('/rooms/2/quote', json={
            **STAY,
            'add_ons': [{'id': '1', 'quantity': 2}, {'id': '4', 'quantity': 0}]
        })
        quote = response.get_json()['data']

        assert quote['nights'] == 2
        assert quote['room_total'] == 640
        assert quote['add_ons_total'] == 50
        assert quote['total'] == 690
        assert [a['name'] for a in quote['add_ons']] == ['Continental Breakfast']

    def test_quote_with_promo_code(self, client, monsoon_offer):
        response = client.post('/rooms/2/quote', json={**STAY, 'promo_code': 'MONSOON20'})
        quote = response.get_json()['data']

        assert quote['promo_code'] == 'MONSOON20'
        assert quote['discount'] == 100
        assert quote['total_after_discount'] == 540

    def test_unknown_add_on(self, client):
        response = client.post('/rooms/2/quote', json={**STAY, 'add_ons': [{'id': '42', 'quantity': 1}]})
        assert response.status_code == 400

    def test_reversed_dates(self, client):
        response = client.post('/rooms/2/quote', json={
            'check_in': '2099-05-03', 'check_out': '2099-05-01'
        })
        assert response.status_code == 400


class TestBooking:
    """Tests for guest bookings and the guest dashboard."""

    def test_requires_login(self, client):
        response = client.post('/bookings', json={'room_id': 1, 'guests': 1, **STAY})
        assert response.status_code == 302
        assert '/login' in response.location

    def test_create_booking(self, guest_client):
        response = guest_client.post('/bookings', json={
            'room_id': 2,
            'guests': 2,
            'add_ons': [{'id': '1', 'quantity': 2}],
            'special_requests': 'Late arrival',
            **STAY
        })
        assert response.status_code == 201
        booking = response.get_json()['data']

        assert booking['total_amount'] == 690
        assert booking['booking_status'] == 'pending'
        assert booking['payment_status'] == 'pending'
        assert booking['room_name'] == 'Ocean View Suite'
        assert booking['guest_details']['email'] == 'priya.sharma@gmail.com'

    def test_capacity_exceeded(self, guest_client):
        response = guest_client.post('/bookings', json={'room_id': 1, 'guests': 4, **STAY})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'This room accommodates up to 2 guests'

    def test_past_check_in(self, guest_client):
        response = guest_client.post('/bookings', json={
            'room_id': 1, 'guests': 1, 'check_in': '2020-01-01', 'check_out': '2020-01-03'
        })
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Check-in date cannot be in the past'

    def test_missing_field(self, guest_client):
        response = guest_client.post('/bookings', json={'room_id': 1, **STAY})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Missing required field: guests'

    def test_dashboard_splits_current_and_history(self, guest_client, authenticated_client):
        first = guest_client.post('/bookings', json={'room_id': 1, 'guests': 1, **STAY})
        guest_client.post('/bookings', json={'room_id': 4, 'guests': 1, **STAY})
        booking_id = first.get_json()['data']['id']

        authenticated_client.post(f'/admin/bookings/{booking_id}/status',
                                  json={'status': 'completed'})

        data = guest_client.get('/dashboard').get_json()['data']
        assert [b['id'] for b in data['history']] == [booking_id]
        assert len(data['current']) == 1
        assert data['profile']['email'] == 'priya.sharma@gmail.com'
        assert 'password_hash' not in data['profile']

        rewards = data['rewards']
        assert rewards['loyalty_status'] == 'bronze'
        assert rewards['total_bookings'] == 2
        assert rewards['next_tier'] == {'tier': 'silver', 'threshold': 20000, 'remaining': 20000}


class TestContact:
    """Tests for the contact form."""

    def test_missing_field(self, client):
        response = client.post('/contact', json={'name': 'Meera', 'email': 'meera@gmail.com'})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Missing required field: message'

    def test_form_submission(self, client):
        response = client.post('/contact', data={
            'name': 'Meera Iyer',
            'email': 'meera.iyer@gmail.com',
            'message': 'Do you allow pets?'
        })
        assert response.status_code == 201
        message = response.get_json()['data']
        assert message['status'] == 'unread'
        assert message['priority'] == 'medium'
        assert message['is_starred'] is False

    def test_invalid_phone(self, client):
        response = client.post('/contact', json={
            'name': 'Meera Iyer',
            'email': 'meera.iyer@gmail.com',
            'phone': 'call me',
            'message': 'Do you allow pets?'
        })
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Invalid phone number'


class TestOffers:
    """Tests for offers, promo code checks and add-ons."""

    def test_active_offers(self, app, client, monsoon_offer):
        from models.promotion import create_promotion

        with app.app_context():
            create_promotion({'title': 'Expired', 'discount_value': 5,
                              'valid_from': '2020-01-01', 'valid_to': '2020-02-01'})
            create_promotion({'title': 'Paused', 'discount_value': 5, 'is_active': False})

        titles = [offer['title'] for offer in client.get('/offers').get_json()['data']]
        assert titles == ['Monsoon Escape']

    def test_validate_promo_code(self, client, monsoon_offer):
        response = client.post('/offers/validate', json={'promo_code': 'monsoon20', 'subtotal': 300})
        data = response.get_json()['data']

        assert data['discount'] == 60
        assert data['total'] == 240

    def test_invalid_promo_code(self, client):
        response = client.post('/offers/validate', json={'promo_code': 'NOPE', 'subtotal': 300})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Invalid promo code'

    def test_add_on_catalog(self, client):
        body = client.get('/add-ons').get_json()
        assert body['currency'] == 'INR'
        assert [a['name'] for a in body['data']][0] == 'Continental Breakfast'
