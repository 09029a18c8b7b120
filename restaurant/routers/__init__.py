from restaurant.routers import auth, companies, menu, orders, reports, users

__all__ = ["auth", "companies", "menu", "orders", "reports", "users"]
