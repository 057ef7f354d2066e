# =============================================================================
# streamlit_app.py — Prompt Builder form: pick a mode, fill fields, get a prompt
# =============================================================================
# Run: streamlit run streamlit_app.py
# Backend: BACKEND_URL (default http://127.0.0.1:3000)
# =============================================================================

import os

import requests
import streamlit as st

# No trailing slash so paths like /api/generate work
BASE_URL = (os.environ.get("BACKEND_URL") or "http://127.0.0.1:3000").rstrip("/")

MODE_LABELS = {
    "general": "งานทั่วไป",
    "coding": "งานเขียนโค้ด",
    "media": "สร้างภาพ/วิดีโอ",
}

BASE_INPUTS = [
    ("goal", "เป้าหมาย", True),
    ("audience", "กลุ่มเป้าหมาย", False),
    ("scope", "ขอบเขตและบริบท", True),
]
TOOLS_INPUT = ("tools", "เครื่องมือ/ข้อจำกัดด้านเทคโนโลยี", False)
CODING_INPUTS = [
    ("codeLanguage", "ภาษาโปรแกรม", False),
    ("runtimeEnv", "สภาพแวดล้อมที่ใช้รัน", False),
    ("repoUrl", "ลิงก์รีโพสิทอรี", False),
    ("entryPoint", "ไฟล์/ฟังก์ชันเริ่มต้น", False),
    ("errorMessage", "ข้อความ error", True),
    ("expectedBehavior", "พฤติกรรมที่คาดหวัง", True),
    ("testInputs", "ข้อมูลสำหรับทดสอบ", True),
    ("performanceTarget", "เป้าหมายด้านประสิทธิภาพ", False),
]
MEDIA_INPUTS = [
    ("mediaType", "ประเภทสื่อ", False),
    ("purpose", "วัตถุประสงค์การใช้งาน", False),
    ("style", "สไตล์", False),
    ("resolution", "ความละเอียด", False),
    ("aspectRatio", "อัตราส่วนภาพ", False),
    ("colorPalette", "โทนสี/พาเลตสี", False),
    ("camera", "มุมกล้อง/เลนส์", False),
    ("duration", "ความยาววิดีโอ", False),
    ("platform", "แพลตฟอร์มที่เผยแพร่", False),
    ("references", "ผลงานอ้างอิง", True),
    ("negative", "สิ่งที่ไม่ต้องการให้ปรากฏ", True),
]
TAIL_INPUTS = [
    ("output", "ผลลัพธ์ที่ต้องการ", True),
    ("format", "รูปแบบผลลัพธ์", False),
    ("examples", "ตัวอย่าง/สไตล์อ้างอิง", True),
    ("donts", "ข้อห้าม", True),
]


def inputs_for(mode: str) -> list[tuple[str, str, bool]]:
    if mode == "coding":
        return [*BASE_INPUTS, TOOLS_INPUT, *CODING_INPUTS, *TAIL_INPUTS]
    if mode == "media":
        return [*BASE_INPUTS, *MEDIA_INPUTS, *TAIL_INPUTS]
    return [*BASE_INPUTS, TOOLS_INPUT, *TAIL_INPUTS]


def fetch_post_json(path: str, json_payload: dict) -> dict | None:
    path = path if path.startswith("/") else "/" + path
    url = f"{BASE_URL}{path}"
    try:
        r = requests.post(url, json=json_payload, timeout=90)
        r.raise_for_status()
        return r.json()
    except requests.exceptions.HTTPError as e:
        if e.response is not None and e.response.status_code == 429:
            st.error("ส่งคำขอถี่เกินไป กรุณารอสักครู่แล้วลองใหม่")
        else:
            st.error(f"เกิดข้อผิดพลาดในการเรียก API: {e}")
        return None
    except requests.exceptions.RequestException as e:
        st.error(f"เกิดข้อผิดพลาดในการเรียก API: {e}")
        return None


st.set_page_config(page_title="Prompt Builder", layout="centered")
st.title("Prompt Builder")
with st.sidebar:
    st.caption(f"Backend: `{BASE_URL}`")
    st.caption("Start both: `python run.py`")

mode = st.radio(
    "ประเภทงาน",
    list(MODE_LABELS),
    format_func=lambda m: MODE_LABELS[m],
    horizontal=True,
)

with st.form("prompt_form", clear_on_submit=False):
    values: dict[str, str] = {}
    for key, label, multiline in inputs_for(mode):
        if multiline:
            values[key] = st.text_area(label, key=f"{mode}-{key}", height=90)
        else:
            values[key] = st.text_input(label, key=f"{mode}-{key}")
    col_lang, col_tone, col_len = st.columns(3)
    values["language"] = col_lang.text_input("ภาษา", value="ไทย")
    values["tone"] = col_tone.text_input("โทน", value="ชัดเจน ตรงประเด็น")
    values["lengthPref"] = col_len.selectbox("ความยาวโดยรวม", ["สั้น", "ปานกลาง", "ยาว"], index=1)
    creativity = st.slider("ความสร้างสรรค์ (temperature)", 0.0, 1.0, 0.3, 0.1)
    submitted = st.form_submit_button("สร้าง prompt", type="primary")

if submitted:
    body = {k: v.strip() for k, v in values.items()}
    body["mode"] = mode
    body["creativity"] = creativity
    with st.spinner("กำลังสร้าง prompt..."):
        out = fetch_post_json("/api/generate", body)
    if out:
        st.divider()
        st.code(out.get("prompt") or "(ไม่มีผลลัพธ์)", language=None)
        st.caption(f"model: {out.get('model', '—')} · mode: {out.get('mode', '—')}")
