"""mediacheck - media storage auditing.

Reconciles a content catalog against the physical media store and
reports duplicate, oversized, missing, orphaned, disallowed and
unused media.
"""

__version__ = "0.3.0"
