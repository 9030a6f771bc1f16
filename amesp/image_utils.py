from PIL import Image, UnidentifiedImageError
import io
import logging

logger = logging.getLogger(__name__)


def process_image(file_stream, max_size=(1200, 1200), quality=85):
    """
    Redimensiona e comprime uma imagem enviada (logo de maricultor, galeria).

    :param file_stream: O stream de bytes do arquivo de imagem.
    :param max_size: Uma tupla (width, height) com o tamanho máximo.
    :param quality: A qualidade da compressão JPEG (0-100).
    :return: Um objeto BytesIO com a imagem processada e seu content type,
             ou (None, None) se o arquivo não for uma imagem.
    """
    try:
        img = Image.open(file_stream)

        # Paletas e canal alfa não existem em JPEG
        if img.mode in ('P', 'RGBA', 'LA'):
            img = img.convert('RGB')

        # Mantém a proporção da imagem
        img.thumbnail(max_size, Image.Resampling.LANCZOS)

        img_byte_arr = io.BytesIO()
        img.save(img_byte_arr, format='JPEG', quality=quality, optimize=True)
        img_byte_arr.seek(0)

        return img_byte_arr, 'image/jpeg'

    except (UnidentifiedImageError, OSError) as e:
        logger.warning(f"Erro ao processar imagem: {e}")
        return None, None


def process_logo_image(file_stream):
    return process_image(file_stream, max_size=(500, 500))
