import qrcode
from PIL import Image, ImageDraw, ImageFont
from io import BytesIO
from django.conf import settings

# A4 landscape at 150 DPI
WIDTH, HEIGHT = 1754, 1240
RESOLUTION = 150.0

TITLE_COLOR = (44, 62, 80)
BODY_COLOR = (52, 73, 94)
NAME_COLOR = (231, 76, 60)
COURSE_COLOR = (41, 128, 185)
MUTED_COLOR = (127, 140, 141)
BORDER_COLOR = (52, 152, 219)

FONT_DIR = "/usr/share/fonts/truetype/dejavu"


def _load_font(size, bold=False):
    name = "DejaVuSans-Bold.ttf" if bold else "DejaVuSans.ttf"
    try:
        return ImageFont.truetype(f"{FONT_DIR}/{name}", size)
    except OSError:
        # Minimal containers ship without DejaVu; Pillow's bundled font scales.
        return ImageFont.load_default(size=size)


def _draw_centered(draw, y, text, font, fill):
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    draw.text(((WIDTH - (right - left)) / 2, y), text, font=font, fill=fill)


def _verification_qr(certificate_id, size):
    verify_url = f"{settings.FRONTEND_URL.rstrip('/')}/certificates/{certificate_id}"
    qr = qrcode.QRCode(box_size=10, border=2)
    qr.add_data(verify_url)
    qr.make(fit=True)
    qr_img = qr.make_image(fill_color="black", back_color="white").get_image()
    return qr_img.convert("RGB").resize((size, size))


def render_certificate_pdf(certificate):
    """
    Render a certificate payload (studentName, courseName, completionDate,
    certificateId, completionPercentage) to PDF bytes.

    Callers must only pass payloads for courses that passed the eligibility
    check in the same request.
    """
    image = Image.new("RGB", (WIDTH, HEIGHT), (255, 255, 255))
    draw = ImageDraw.Draw(image)

    # Border
    margin = 80
    draw.rectangle(
        [(margin, margin), (WIDTH - margin, HEIGHT - margin)],
        outline=BORDER_COLOR,
        width=8,
    )
    draw.rectangle(
        [(margin + 20, margin + 20), (WIDTH - margin - 20, HEIGHT - margin - 20)],
        outline=BORDER_COLOR,
        width=2,
    )

    _draw_centered(draw, 190, "Certificate of Completion", _load_font(84, bold=True), TITLE_COLOR)
    _draw_centered(draw, 340, "This is to certify that", _load_font(40), BODY_COLOR)
    _draw_centered(draw, 420, certificate["studentName"], _load_font(64, bold=True), NAME_COLOR)
    _draw_centered(draw, 530, "has successfully completed the course", _load_font(36), BODY_COLOR)
    _draw_centered(draw, 600, certificate["courseName"], _load_font(52, bold=True), COURSE_COLOR)

    detail_font = _load_font(30)
    _draw_centered(draw, 720, f"Completion Date: {certificate['completionDate']}", detail_font, MUTED_COLOR)
    _draw_centered(draw, 770, f"Certificate ID: {certificate['certificateId']}", _load_font(26), MUTED_COLOR)
    _draw_centered(
        draw,
        820,
        f"Completion Rate: {certificate['completionPercentage']:g}%",
        detail_font,
        MUTED_COLOR,
    )

    # Branding (bottom left)
    draw.text((margin + 60, HEIGHT - margin - 170), settings.PLATFORM_NAME, font=_load_font(40, bold=True), fill=NAME_COLOR)
    draw.text((margin + 60, HEIGHT - margin - 110), settings.PLATFORM_TAGLINE, font=_load_font(26), fill=MUTED_COLOR)

    # QR code (bottom right)
    qr_size = 200
    image.paste(
        _verification_qr(certificate["certificateId"], qr_size),
        (WIDTH - margin - 60 - qr_size, HEIGHT - margin - 60 - qr_size),
    )

    buffer = BytesIO()
    image.save(buffer, format="PDF", resolution=RESOLUTION)
    return buffer.getvalue()
