import qrcode, io, base64


def render_qr_png(token_value):
    """Base64 PNG of a QR code carrying the attendance token."""
    img = qrcode.make(token_value)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return base64.b64encode(buf.getvalue()).decode("utf-8")
