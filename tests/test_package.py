import pnl_dashboard


def test_public_transforms_are_exported():
    for name in pnl_dashboard.__all__:
        assert callable(getattr(pnl_dashboard, name))
