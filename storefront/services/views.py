# storefront/services/views.py
"""Dict shapes returned by the services; routers validate them into schemas."""


def product_view(product):
    if product is None:
        return None
    return {
        "id": product.id,
        "name": product.name,
        "price": product.price,
        "stock": product.stock,
        "category": product.category,
        "image": product.image,
        "created_at": product.created_at,
    }


def line_views(items, products: dict, with_price: bool = True):
    # product resolved against the current catalog, None once deleted
    views = []
    for i in items:
        view = {
            "product_id": i.product_id,
            "product": product_view(products.get(i.product_id)),
            "quantity": i.quantity,
        }
        if with_price:
            view["price"] = i.price
        views.append(view)
    return views


def order_view(order, products: dict):
    return {
        "order_id": order.order_id,
        "user_id": order.user_id,
        "user_name": order.user_name,
        "items": line_views(order.items, products),
        "total_amount": order.total_amount,
        "payment_method": order.payment_method,
        "status": order.status,
        "address": order.address,
        "phone": order.phone,
        "created_at": order.created_at,
    }


def admin_order_view(order, user, products: dict):
    return {
        "id": order.order_id,
        "order_id": order.order_id,
        "email": user.email if user is not None else "Unknown",
        "name": user.name if user is not None else order.user_name,
        "items": line_views(order.items, products),
        "total_amount": order.total_amount,
        "status": order.status,
        "address": order.address,
        "phone": order.phone,
        "created_at": order.created_at,
    }


def user_view(user):
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "status": user.status,
        "created_at": user.created_at,
    }


def page_count(total: int, limit: int) -> int:
    return -(-total // limit) if limit else 0
