from rest_framework import serializers

IMPORT_ACTIONS = ['batch-insert', 'get-stats', 'check-cui']


class ImportRequestSerializer(serializers.Serializer):
    """Serializer for the import endpoint's action envelope."""
    action = serializers.ChoiceField(choices=IMPORT_ACTIONS)
    data = serializers.ListField(child=serializers.DictField(), required=False)
    year = serializers.IntegerField(required=False, allow_null=True, min_value=1990, max_value=2100)
    cui = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        if attrs['action'] == 'batch-insert' and not attrs.get('data'):
            raise serializers.ValidationError({"data": "Date invalide"})
        if attrs['action'] == 'check-cui' and not attrs.get('cui'):
            raise serializers.ValidationError({"cui": "CUI lipsă"})
        return attrs
