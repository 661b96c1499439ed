import pytest

pytestmark = pytest.mark.unit


class TestSensitiveDataMasking:
    def test_password_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "data": "password='s3cret123'"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "s3cret123" not in result["data"]
        assert "***MASKED***" in result["data"]

    def test_token_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "header": "token=abc123xyz"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "abc123xyz" not in result["header"]
        assert "***MASKED***" in result["header"]

    def test_secret_masked_case_insensitive(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "detail": "SECRET: hunter2"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "hunter2" not in result["detail"]

    def test_non_string_values_untouched(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "order.committed", "order_id": 42}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["order_id"] == 42

    def test_non_sensitive_data_unchanged(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "order.committed", "shipping_address": "12 Market St"}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["shipping_address"] == "12 Market St"
        assert result["event"] == "order.committed"
