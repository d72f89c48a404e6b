from rest_framework import serializers
from .models import TeamComposition, Department, SlotAction


class TeamCompositionSerializer(serializers.ModelSerializer):

    class Meta:
        model = TeamComposition
        fields = [
            'id',
            'name',
            'dev_total',
            'infra_total',
            'data_total',
            'iot_total',
            'sysemb_total',
            'dev_filled',
            'infra_filled',
            'data_filled',
            'iot_filled',
            'sysemb_filled',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ToggleSlotSerializer(serializers.Serializer):
    department = serializers.ChoiceField(choices=Department.choices)
    action = serializers.ChoiceField(choices=SlotAction.choices)
