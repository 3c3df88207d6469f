from enum import Enum


class PublicationType(str, Enum):
    A = "A类"
    B = "B类"
    C = "C类"
    HIGH_LEVEL_CHINESE = "高水平中文"
    INFO_COMM_ENGINEERING = "信息通信工程"


class CompetitionLevel(str, Enum):
    A_PLUS = "A+类"
    A = "A类"
    A_MINUS = "A-类"


class CompetitionAward(str, Enum):
    NATIONAL_FIRST_OR_ABOVE = "国家级一等奖及以上"
    NATIONAL_SECOND = "国家级二等奖"
    NATIONAL_THIRD = "国家级三等奖"
    PROVINCIAL_FIRST_OR_ABOVE = "省级一等奖及以上"
    PROVINCIAL_SECOND = "省级二等奖"


class AwardLevel(str, Enum):
    """Level scale shared by innovation projects and honors."""
    NATIONAL = "国家级"
    PROVINCIAL = "省级"
    SCHOOL = "校级"


class ProjectRole(str, Enum):
    LEAD = "组长"
    MEMBER = "成员"


class ProjectStatus(str, Enum):
    COMPLETED = "已结项"
    IN_PROGRESS = "在研"


class LanguageTest(str, Enum):
    CET4 = "cet4"
    CET6 = "cet6"
    TOEFL = "toefl"
    IELTS = "ielts"


class ProofKind(str, Enum):
    TRANSCRIPT = "transcript"
    CET4_CERTIFICATE = "cet4_certificate"
    CET6_CERTIFICATE = "cet6_certificate"
    TOEFL_CERTIFICATE = "toefl_certificate"
    IELTS_CERTIFICATE = "ielts_certificate"
    PUBLICATION_PROOF = "publication_proof"
    COMPETITION_PROOF = "competition_proof"
    PATENT_PROOF = "patent_proof"
    INNOVATION_PROOF = "innovation_proof"


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    SYSTEM_REVIEWING = "system_reviewing"
    SYSTEM_APPROVED = "system_approved"
    SYSTEM_REJECTED = "system_rejected"
    ADMIN_REVIEWING = "admin_reviewing"
    APPROVED = "approved"
    REJECTED = "rejected"


class ReviewAction(str, Enum):
    SUBMIT = "submit"
    SYSTEM_DECIDE = "system_decide"
    START_ADMIN_REVIEW = "start_admin_review"
    ADMIN_APPROVE = "admin_approve"
    ADMIN_REJECT = "admin_reject"
    SPECIAL_TALENT_DEFENSE = "special_talent_defense"
    ANNOTATE = "annotate"


class EligibilityFailureCode(str, Enum):
    LANGUAGE_THRESHOLD_NOT_MET = "language_threshold_not_met"
    LANGUAGE_PROOF_MISSING = "language_proof_missing"
    TRANSCRIPT_MISSING = "transcript_missing"
    ACHIEVEMENT_PROOF_MISSING = "achievement_proof_missing"
    INSUFFICIENT_RECOMMENDATIONS = "insufficient_recommendations"


class ScoreCategory(str, Enum):
    PUBLICATION = "publication"
    COMPETITION = "competition"
    PATENT = "patent"
    INNOVATION = "innovation"
    SPECIAL_TALENT = "special_talent"
    VOLUNTEER = "volunteer"
    HONOR = "honor"
    SOCIAL_WORK = "social_work"
