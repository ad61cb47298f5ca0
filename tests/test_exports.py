"""Tests for pico_cart module exports."""


class TestModuleExports:
    """Tests for public API exports."""

    def test_all_exports_resolve(self):
        import pico_cart

        for name in pico_cart.__all__:
            assert getattr(pico_cart, name) is not None, name

    def test_core_names_exported(self):
        from pico_cart import CartProvider, CartStore, create_app, use_cart

        assert callable(use_cart)
        assert callable(create_app)
        assert CartStore is not None
        assert CartProvider is not None
