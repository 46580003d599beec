"""Mixin modules discovered by PackageMixinSource in the tests."""
