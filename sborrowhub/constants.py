PASSWORD_LENGTH = 8

ROLES = ("user", "officer", "admin")
STAFF_ROLES = ("officer", "admin")

# Activity feed types
ACTIVITY_USER = "user"
ACTIVITY_BORROW = "borrow"
ACTIVITY_CART = "cart"
ACTIVITY_REVIEW = "review"
ACTIVITY_SUPPORT = "support"
ACTIVITY_FEEDBACK = "feedback"
ACTIVITY_NOTIFICATION = "notification"
ACTIVITY_ACTIVITY = "activity"


def _label(verb, fallback):
    return lambda item: f"{verb} {item}" if item else fallback


# (predicate(action, method), type, text(item)) in priority order
ACTIVITY_ACTIONS = [
    (lambda a, m: "/auth/signup" in a, ACTIVITY_USER, lambda item: "Registered an account"),
    (lambda a, m: "/auth/login" in a, ACTIVITY_USER, lambda item: "Logged in"),
    (lambda a, m: "/request-item" in a and m == "POST", ACTIVITY_BORROW,
     _label("Requested to borrow", "Requested to borrow an item")),
    (lambda a, m: "/cart/checkout" in a and m == "POST", ACTIVITY_BORROW,
     lambda item: "Submitted cart for borrowing"),
    (lambda a, m: "/cart" in a and m == "POST", ACTIVITY_CART,
     lambda item: f"Added {item} to cart" if item else "Added item to cart"),
    (lambda a, m: "/cart" in a and m == "DELETE", ACTIVITY_CART,
     lambda item: f"Removed {item} from cart" if item else "Removed item from cart"),
    (lambda a, m: "/profile" in a and m == "PUT", ACTIVITY_USER, lambda item: "Updated profile information"),
    (lambda a, m: "/password" in a and m == "PUT", ACTIVITY_USER, lambda item: "Changed account password"),
    (lambda a, m: "/review" in a and m == "POST", ACTIVITY_REVIEW, lambda item: "Submitted a review"),
    (lambda a, m: "/contact" in a and m == "POST", ACTIVITY_SUPPORT, lambda item: "Sent a message to support"),
    (lambda a, m: "/feedback" in a and m == "POST", ACTIVITY_FEEDBACK, lambda item: "Submitted feedback"),
    (lambda a, m: "/notification" in a and "/read" in a and m == "PATCH", ACTIVITY_NOTIFICATION,
     lambda item: "Marked a notification as read"),
    (lambda a, m: "/notification" in a and "mark-all-read" in a and m == "PATCH", ACTIVITY_NOTIFICATION,
     lambda item: "Marked all notifications as read"),
]

FALLBACK_ACTIONS = {
    "POST": (ACTIVITY_ACTIVITY, "Created something"),
    "PUT": (ACTIVITY_ACTIVITY, "Updated something"),
    "PATCH": (ACTIVITY_ACTIVITY, "Updated something"),
    "DELETE": (ACTIVITY_ACTIVITY, "Deleted something"),
}


def describe_activity(action: str, item: str = ""):
    """Map a logged "METHOD /path" to (type, text) for the activity feed."""
    method = action.split(" ", 1)[0]
    for match, kind, text in ACTIVITY_ACTIONS:
        if match(action, method):
            return kind, text(item)
    if method in FALLBACK_ACTIONS:
        return FALLBACK_ACTIONS[method]
    return ACTIVITY_ACTIVITY, action
