from django.urls import path
from .views import ReviewView, OutcomesView, DuePromptsView

urlpatterns = [
    path("reviews", ReviewView.as_view(), name="review"),
    path(
        "users/<uuid:user_id>/prompts/<uuid:prompt_id>/outcomes",
        OutcomesView.as_view(),
        name="prompt-outcomes",
    ),
    path("users/<uuid:user_id>/due-prompts", DuePromptsView.as_view(), name="due-prompts"),
]
