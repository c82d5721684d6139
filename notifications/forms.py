from __future__ import annotations

from django import forms
from django.contrib.auth import get_user_model

from .models import Notification


class NotificationForm(forms.ModelForm):
    user = forms.ModelChoiceField(queryset=get_user_model().objects.all(), required=False)

    class Meta:
        model = Notification
        fields = ["user", "title", "message", "type", "category", "link"]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["type"].required = False
