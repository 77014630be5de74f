"""
목적: 외부 연동 패키지 공개 API를 제공한다.
설명: Redis 클라이언트 팩토리와 해석 백엔드 연동 모듈의 접근 포인트를 제공한다.
디자인 패턴: 퍼사드
참조: src/tarot_reading/integrations/redis, src/tarot_reading/integrations/interpreter
"""
