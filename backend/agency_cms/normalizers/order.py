def normalize_order(order):
    return {
        "order_id": order.order_id,
        "name": order.name,
        "email": order.email,
        "phone": order.phone,
        "company": order.company,
        "message": order.message,
        "budget": order.budget,
        "timeline": order.timeline,
        "package_name": order.package_name,
        "package_price": order.package_price,
        "status": order.status,
        "created_at": order.created_at.isoformat() if order.created_at else None,
    }
