from rest_framework import serializers


class ChatMessageSerializer(serializers.Serializer):
    """Serializer for one conversation turn."""
    role = serializers.ChoiceField(choices=['user', 'assistant'])
    content = serializers.CharField(max_length=10000, trim_whitespace=False)


class ChatRequestSerializer(serializers.Serializer):
    """Serializer for chat request."""
    messages = ChatMessageSerializer(many=True, allow_empty=False)

    def validate_messages(self, value):
        if not any(m['role'] == 'user' for m in value):
            raise serializers.ValidationError("At least one user message is required")
        return value
