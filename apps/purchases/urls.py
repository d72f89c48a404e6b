from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'purchases'

# Router for ViewSets
router = DefaultRouter()
router.register(r'team/purchases', views.TeamPurchaseViewSet, basename='team-purchase')
router.register(r'admin/purchases', views.AdminPurchaseViewSet, basename='admin-purchase')

urlpatterns = [
    # Team routes
    # GET    /api/team/purchases/                 - List own purchases (?needs_return=true)
    # POST   /api/team/purchases/                 - Create single purchase
    # POST   /api/team/purchases/batch/           - Create batch purchase
    # POST   /api/team/purchases/{id}/return/     - Return a confirmed purchase
    # GET    /api/team/purchases/batches/         - Own purchases grouped by batch
    # GET    /api/team/purchases/summary/         - Own purchase counts
    # GET    /api/team/resources/{id}/quota/      - Remaining quota for a resource

    # Admin routes
    # GET    /api/admin/purchases/                        - List all (?status=&team_id=&needs_return=)
    # GET    /api/admin/purchases/{id}/                   - Purchase details
    # POST   /api/admin/purchases/{id}/action/            - Confirm or cancel
    # POST   /api/admin/purchases/batch/action/           - Review several purchases
    # POST   /api/admin/purchases/{id}/mark-returned/     - Record a physical return
    # POST   /api/admin/purchases/{id}/unmark-returned/   - Revert a return
    # GET    /api/admin/purchases/batches/                - Grouped by batch
    # GET    /api/admin/purchases/batches/{batch_id}/     - Batch details
    # GET    /api/admin/purchases/summary/                - Counts by status

    path('team/resources/<int:resource_id>/quota/', views.team_resource_quota, name='team-resource-quota'),

    # Include router URLs
    path('', include(router.urls)),
]
