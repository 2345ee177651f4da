# erpsync Client Module
# REST collaborator for the remote import and delete calls

from erpsync.client.odoo import OdooClient

__all__ = [
    "OdooClient",
]
