from banking_store.services.customer_service import CustomerService

__all__ = ["CustomerService"]
