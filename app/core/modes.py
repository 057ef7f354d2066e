# =============================================================================
# app/core/modes.py — Task modes, field tables, and instruction templates
# =============================================================================
# Each mode owns a fixed, ordered (field, label) table. The order is what the
# user sees as "the spec", so it must not be re-sorted.
# =============================================================================

from typing import Literal

Mode = Literal["general", "coding", "media"]

MODES: tuple[Mode, ...] = ("general", "coding", "media")
DEFAULT_MODE: Mode = "general"

DEFAULT_LANGUAGE = "ไทย"
DEFAULT_TONE = "ชัดเจน ตรงประเด็น"
DEFAULT_LENGTH_PREF = "ปานกลาง"
DEFAULT_CREATIVITY = 0.3

FINAL_PROMPT_HEADER = "FINAL PROMPT"
LOCAL_FALLBACK_MODEL = "local-fallback"
ERROR_FALLBACK_MESSAGE = "กรอกข้อมูลใหม่อีกครั้ง ขณะนี้ไม่สามารถเรียก Gemini API ได้"

_HEAD_FIELDS = [
    ("goal", "เป้าหมาย"),
    ("audience", "กลุ่มเป้าหมาย"),
    ("scope", "ขอบเขตและบริบท"),
]
_TOOLS_FIELD = ("tools", "เครื่องมือ/ข้อจำกัดด้านเทคโนโลยี")
_TAIL_FIELDS = [
    ("output", "ผลลัพธ์ที่ต้องการ"),
    ("format", "รูปแบบผลลัพธ์"),
    ("examples", "ตัวอย่าง/สไตล์อ้างอิง"),
    ("donts", "ข้อห้าม"),
    ("language", "ภาษา"),
    ("tone", "โทน"),
    ("length_pref", "ความยาวโดยรวม"),
]

CODING_FIELDS = [
    ("code_language", "ภาษาโปรแกรม"),
    ("runtime_env", "สภาพแวดล้อมที่ใช้รัน"),
    ("repo_url", "ลิงก์รีโพสิทอรี"),
    ("entry_point", "ไฟล์/ฟังก์ชันเริ่มต้น"),
    ("error_message", "ข้อความ error"),
    ("expected_behavior", "พฤติกรรมที่คาดหวัง"),
    ("test_inputs", "ข้อมูลสำหรับทดสอบ"),
    ("performance_target", "เป้าหมายด้านประสิทธิภาพ"),
]

MEDIA_FIELDS = [
    ("media_type", "ประเภทสื่อ"),
    ("purpose", "วัตถุประสงค์การใช้งาน"),
    ("style", "สไตล์"),
    ("resolution", "ความละเอียด"),
    ("aspect_ratio", "อัตราส่วนภาพ"),
    ("color_palette", "โทนสี/พาเลตสี"),
    ("camera", "มุมกล้อง/เลนส์"),
    ("duration", "ความยาววิดีโอ"),
    ("platform", "แพลตฟอร์มที่เผยแพร่"),
    ("references", "ผลงานอ้างอิง"),
    ("negative", "สิ่งที่ไม่ต้องการให้ปรากฏ"),
]

FIELD_TABLES: dict[Mode, list[tuple[str, str]]] = {
    "general": [*_HEAD_FIELDS, _TOOLS_FIELD, *_TAIL_FIELDS],
    "coding": [*_HEAD_FIELDS, _TOOLS_FIELD, *CODING_FIELDS, *_TAIL_FIELDS],
    "media": [*_HEAD_FIELDS, *MEDIA_FIELDS, *_TAIL_FIELDS],
}

SYSTEM_HINTS: dict[Mode, str] = {
    "general": (
        "คุณคือ Prompt Engineer ระดับมืออาชีพ สร้าง 'Single prompt' ที่พร้อมนำไปใช้กับ LLM ใดก็ได้ "
        "โครงสร้างต้องกระชับ ชัดเจน มีบริบทพอ และใส่ข้อจำกัดสำคัญให้ครบ โดยไม่สาธยายทฤษฎีเพิ่ม"
    ),
    "coding": (
        "คุณคือ Prompt Engineer ระดับมืออาชีพที่เชี่ยวชาญงานพัฒนาซอฟต์แวร์ สร้าง 'Single prompt' "
        "สำหรับผู้ช่วยเขียนโค้ด ที่ระบุภาษา สภาพแวดล้อม อินพุต/เอาต์พุต และเกณฑ์ความถูกต้องให้ชัดเจน "
        "กระชับ ตรวจสอบได้ และไม่สาธยายทฤษฎีเพิ่ม"
    ),
    "media": (
        "คุณคือ Prompt Engineer ระดับมืออาชีพที่เชี่ยวชาญโมเดลสร้างภาพและวิดีโอ สร้าง 'Single prompt' "
        "ที่บรรยายองค์ประกอบภาพ สไตล์ แสง มุมกล้อง และข้อจำกัดทางเทคนิคให้ครบ "
        "กระชับ เป็นรูปธรรม และไม่สาธยายทฤษฎีเพิ่ม"
    ),
}

COMMON_REQUIREMENTS = [
    f'เริ่มด้วยหัวข้อ: "{FINAL_PROMPT_HEADER}"',
    "ตามด้วยบล็อคข้อความ prompt เดียว ไม่มีคำอธิบายส่วนเกิน",
    "ใช้ bullet เท่าที่จำเป็น หลีกเลี่ยงน้ำไม่จำเป็น",
]

MODE_REQUIREMENTS: dict[Mode, list[str]] = {
    "general": [],
    "coding": [
        "ระบุเวอร์ชัน แพ็กเกจ และคำสั่งสำหรับรันให้ชัดเจนเมื่อเกี่ยวข้อง",
        "ถ้ามีข้อความ error ให้ใส่ขั้นตอนวิเคราะห์หาสาเหตุแบบสั้นๆ",
    ],
    "media": [
        "ระบุองค์ประกอบภาพ/วิดีโอ (ตัวแบบ ฉาก แสง มุมกล้อง การเคลื่อนไหว) เรียงตามความสำคัญ",
        "ใส่ negative cues (สิ่งที่ไม่ต้องการให้ปรากฏ) ไว้ท้าย prompt",
    ],
}

USER_TASK_TEMPLATE = (
    "จากข้อมูลสรุปด้านล่าง ให้คุณสร้าง Prompt ภาษา{language} ในรูปแบบเดียวที่คัดลอกไปใช้ได้ทันที "
    "ปรับโทนให้{tone} ความยาว{length_pref}. ถ้าบางฟิลด์ว่าง ให้ละไว้ ไม่ต้องเดาเอง\n\n"
    "ข้อมูลสรุป:\n{spec_text}\n\n"
    "ข้อกำหนดการส่งออก:\n"
)


def normalize_mode(value: object) -> Mode:
    if not isinstance(value, str):
        return DEFAULT_MODE
    m = value.strip().lower()
    if m in MODES:
        return m  # type: ignore[return-value]
    return DEFAULT_MODE
