"""Webflow REST client and request throttling."""

from cmsops.client.throttle import Throttle
from cmsops.client.webflow_client import WebflowClient

__all__ = ["Throttle", "WebflowClient"]
