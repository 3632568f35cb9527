# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Services package - External integrations and side effects.
"""

from .mongodb import MongoDBService
from .donor_store import DonorStore
from .sms import MessageTransport, TwilioTransport, DeepLinkOnlyTransport, create_message_transport
from .contact_relay import ContactRelayService

__all__ = [
    "MongoDBService",
    "DonorStore",
    "MessageTransport",
    "TwilioTransport",
    "DeepLinkOnlyTransport",
    "create_message_transport",
    "ContactRelayService"
]
