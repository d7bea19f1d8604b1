"""
Tests for promotions: display status, public offers and promo code checks.
"""

import pytest
from datetime import date

from models.promotion import (
    promotion_status,
    is_within_window,
    get_active_offers,
    calculate_discount,
    normalize_discount_type,
)


def _promotion(**overrides):
    promotion = {
        'id': 1,
        'title': 'Monsoon Escape',
        'promo_code': 'MONSOON',
        'discount_type': 'percentage',
        'discount_value': 20,
        'minimum_spend': 0,
        'maximum_discount': 0,
        'valid_from': '2024-01-01',
        'valid_to': '2024-01-31',
        'is_active': True,
        'usage_limit': 0,
        'used_count': 0,
        'applicable_room_types': [],
    }
    promotion.update(overrides)
    return promotion


class TestOfferWindow:
    """Tests for offer validity windows."""

    def test_expired_offer_excluded(self):
        offers = get_active_offers([_promotion()], date(2024, 2, 1))
        assert offers == []

    def test_bounds_are_inclusive(self):
        assert is_within_window(_promotion(), date(2024, 1, 1)) is True
        assert is_within_window(_promotion(), date(2024, 1, 31)) is True

    def test_inactive_offer_excluded(self):
        assert get_active_offers([_promotion(is_active=False)], date(2024, 1, 15)) == []

    def test_open_bounds(self):
        assert is_within_window(_promotion(valid_from=None, valid_to=None), date(2030, 1, 1)) is True


class TestPromotionStatus:
    """Tests for the admin display status."""

    def test_statuses(self):
        assert promotion_status(_promotion(), date(2024, 1, 15)) == 'active'
        assert promotion_status(_promotion(), date(2023, 12, 31)) == 'scheduled'
        assert promotion_status(_promotion(), date(2024, 2, 1)) == 'expired'
        assert promotion_status(_promotion(is_active=False), date(2024, 1, 15)) == 'inactive'


class TestDiscount:
    """Tests for discount computation."""

    def test_percentage(self):
        assert calculate_discount(_promotion(), 500) == 100

    def test_percentage_capped(self):
        assert calculate_discount(_promotion(maximum_discount=60), 500) == 60

    def test_fixed_never_exceeds_subtotal(self):
        promotion = _promotion(discount_type='fixed', discount_value=300)
        assert calculate_discount(promotion, 200) == 200

    def test_flat_maps_to_fixed(self):
        assert normalize_discount_type('flat') == 'fixed'
        with pytest.raises(ValueError):
            normalize_discount_type('bogo')


class TestPromotionStore:
    """Tests that need the database."""

    def test_code_generated_when_missing(self, app):
        from models.promotion import create_promotion, get_promotion_by_id

        with app.app_context():
            promotion_id = create_promotion({'title': 'Weekend Saver', 'discount_type': 'fixed',
                                             'discount_value': 500})
            promotion = get_promotion_by_id(promotion_id)

            assert len(promotion['promo_code']) == 8
            assert promotion['promo_code'] == promotion['promo_code'].upper()
            assert promotion['is_active'] is True

    def test_validation_errors(self, app):
        from models.promotion import create_promotion

        with app.app_context():
            with pytest.raises(ValueError, match='title'):
                create_promotion({'title': '', 'discount_value': 10})
            with pytest.raises(ValueError, match='exceed 100'):
                create_promotion({'title': 'Too good', 'discount_value': 150})
            with pytest.raises(ValueError, match='End date'):
                create_promotion({'title': 'Backwards', 'valid_from': '2024-02-01',
                                  'valid_to': '2024-01-01'})

    def test_partial_update_checked_against_stored_record(self, app):
        from models.promotion import create_promotion, update_promotion, get_promotion_by_id

        with app.app_context():
            promotion_id = create_promotion({'title': 'Early Bird', 'discount_type': 'percentage',
                                             'discount_value': 10, 'valid_from': '2024-02-01',
                                             'valid_to': '2024-03-01'})

            with pytest.raises(ValueError, match='exceed 100'):
                update_promotion(promotion_id, {'discount_value': 150})
            with pytest.raises(ValueError, match='End date'):
                update_promotion(promotion_id, {'valid_to': '2024-01-01'})

            promotion = get_promotion_by_id(promotion_id)
            assert promotion['discount_value'] == 10
            assert promotion['valid_to'] == '2024-03-01'

            # Switching to a fixed discount lifts the 100 ceiling
            assert update_promotion(promotion_id, {'discount_type': 'flat', 'discount_value': 1500})
            promotion = get_promotion_by_id(promotion_id)
            assert promotion['discount_type'] == 'fixed'
            assert promotion['discount_value'] == 1500

    def test_promo_codes_unique_regardless_of_case(self, app):
        from models.promotion import create_promotion, update_promotion, get_promotion_by_id

        with app.app_context():
            first_id = create_promotion({'title': 'Diwali Special', 'promo_code': 'DIWALI',
                                         'discount_value': 15})
            second_id = create_promotion({'title': 'Holi Special', 'promo_code': 'HOLI',
                                          'discount_value': 10})

            with pytest.raises(ValueError, match='already in use'):
                create_promotion({'title': 'Copycat', 'promo_code': 'diwali',
                                  'discount_value': 5})
            with pytest.raises(ValueError, match='already in use'):
                update_promotion(second_id, {'promo_code': 'Diwali'})

            assert get_promotion_by_id(second_id)['promo_code'] == 'HOLI'
            assert update_promotion(first_id, {'promo_code': 'diwali', 'discount_value': 20})
            assert get_promotion_by_id(first_id)['promo_code'] == 'DIWALI'

    def test_validate_promo_code(self, app):
        from models.promotion import create_promotion, validate_promo_code

        with app.app_context():
            create_promotion({'title': 'Suite Deal', 'promo_code': 'suite10',
                              'discount_type': 'percentage', 'discount_value': 10,
                              'minimum_spend': 1000, 'valid_from': '2024-01-01',
                              'valid_to': '2024-12-31', 'applicable_room_types': ['Ocean Suite']})
            today = date(2024, 6, 1)

            result = validate_promo_code('SUITE10', 2000, today, room_type='Ocean Suite')
            assert result['discount'] == 200
            assert result['total'] == 1800

            with pytest.raises(ValueError, match='Minimum spend'):
                validate_promo_code('SUITE10', 500, today, room_type='Ocean Suite')
            with pytest.raises(ValueError, match='does not apply'):
                validate_promo_code('SUITE10', 2000, today, room_type='Deluxe Room')
            with pytest.raises(ValueError, match='not valid today'):
                validate_promo_code('SUITE10', 2000, date(2025, 1, 1), room_type='Ocean Suite')
            with pytest.raises(ValueError, match='Invalid promo code'):
                validate_promo_code('NOPE', 2000, today)
