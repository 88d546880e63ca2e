"""Default system notification templates and storefront categories."""

DEFAULT_CATEGORIES = [
    {
        "name": "شال",
        "slug": "shal",
        "description": "انواع شال‌های زیبا و باکیفیت",
    },
    {
        "name": "روسری",
        "slug": "roosari",
        "description": "روسری‌های مدرن و سنتی",
    },
    {
        "name": "شال و روسری ساتن",
        "slug": "satin",
        "description": "محصولات ساتن لوکس",
    },
    {
        "name": "شال و روسری نخی",
        "slug": "cotton",
        "description": "محصولات نخی راحت و سبک",
    },
    {
        "name": "شال و روسری ابریشم",
        "slug": "silk",
        "description": "محصولات ابریشم درجه یک",
    },
]


SYSTEM_TEMPLATES = [
    {
        "name": "Order confirmation",
        "description": "Sent when a customer places an order",
        "type": "email",
        "category": "order",
        "subject": "Order {orderNumber} confirmed",
        "content": "Dear {name}, your order {orderNumber} for {totalAmount} has been received.",
    },
    {
        "name": "Order shipped",
        "description": "Sent when an order leaves the warehouse",
        "type": "email",
        "category": "order",
        "subject": "Order {orderNumber} shipped",
        "content": "Dear {name}, your order {orderNumber} is on its way. Tracking code: {trackingCode}",
    },
    {
        "name": "Order shipped (SMS)",
        "description": "Short shipping notice",
        "type": "sms",
        "category": "order",
        "subject": None,
        "content": "Order {orderNumber} shipped. Tracking: {trackingCode}",
    },
    {
        "name": "Payment received",
        "description": "Sent after a successful online payment",
        "type": "email",
        "category": "payment",
        "subject": "Payment for order {orderNumber} received",
        "content": "Dear {name}, we received your payment of {amount}. Reference: {referenceId}",
    },
    {
        "name": "Password reset",
        "description": "Password reset link",
        "type": "email",
        "category": "system",
        "subject": "Reset your password",
        "content": "Dear {name}, use this link to reset your password: {resetLink}",
    },
    {
        "name": "Verification code",
        "description": "One-time login code",
        "type": "sms",
        "category": "system",
        "subject": None,
        "content": "Verification code: {code}",
    },
]
