from django.urls import path
from . import views

app_name = 'cart'

urlpatterns = [
    # GET    /api/team/cart/                          - Cart with totals
    # DELETE /api/team/cart/                          - Empty the cart
    # POST   /api/team/cart/items/                    - Add units of a resource
    # PATCH  /api/team/cart/items/{resource_id}/      - Set quantity (<= 0 removes)
    # DELETE /api/team/cart/items/{resource_id}/      - Remove line
    # POST   /api/team/cart/validate/                 - Dry-run an addition
    # POST   /api/team/cart/checkout/                 - Submit as batch purchase
    path('team/cart/', views.cart, name='cart'),
    path('team/cart/items/', views.cart_items, name='cart-items'),
    path('team/cart/items/<int:resource_id>/', views.cart_item_detail, name='cart-item-detail'),
    path('team/cart/validate/', views.validate_cart_item, name='cart-validate'),
    path('team/cart/checkout/', views.cart_checkout, name='cart-checkout'),
]
