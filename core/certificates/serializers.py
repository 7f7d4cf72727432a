from rest_framework import serializers


class CourseBriefSerializer(serializers.Serializer):
    title = serializers.CharField()
    duration = serializers.IntegerField()


class EligibilitySerializer(serializers.Serializer):
    eligible = serializers.BooleanField()
    message = serializers.CharField()
    currentProgress = serializers.FloatField()
    requiredProgress = serializers.IntegerField()
    course = CourseBriefSerializer(allow_null=True)


class CertificatePreviewSerializer(serializers.Serializer):
    studentName = serializers.CharField()
    courseName = serializers.CharField()
    completionDate = serializers.CharField()
    certificateId = serializers.UUIDField()
    completionPercentage = serializers.FloatField()
    courseDuration = serializers.IntegerField()


class EligibleCertificateSerializer(serializers.Serializer):
    courseId = serializers.IntegerField()
    courseTitle = serializers.CharField()
    completionPercentage = serializers.FloatField()
    completedAt = serializers.DateTimeField(allow_null=True)
    duration = serializers.IntegerField()
    thumbnail = serializers.CharField(allow_blank=True)


class CertificateStatsSerializer(serializers.Serializer):
    totalEligibleCertificates = serializers.IntegerField()
    totalCompletedCourses = serializers.IntegerField()
    averageCompletionRate = serializers.IntegerField()
