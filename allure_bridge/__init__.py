"""Allure report bridge: launch lookup and PDF export over the Allure TestOps API."""
