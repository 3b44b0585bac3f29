AD_PROMPT_TEMPLATE = """
You are an expert Instagram ad creator. Create comprehensive ad content based on this description: "{description}"

Generate the following ad content automatically:
1. A clean, visually appealing image description showing the product from a natural angle, using vibrant or brand-appropriate colors that reflect the product's key features or use case
2. A catchy ad caption (50-150 words) that focuses on emotional appeal, benefits, or excitement (not just features)
3. A list of 10-15 trending, platform-optimized hashtags based on the product category

Analyze the input to determine:
- Product/service type and category
- Target audience (Gen Z, millennials, professionals, etc.)
- Tone/style (modern, luxury, fun, aesthetic, professional, etc.)
- Platform optimization (Instagram focus)

Please respond with a JSON object containing:
{{
  "caption": "An emotionally engaging Instagram caption focusing on benefits and excitement (50-150 words, include relevant emojis)",
  "hashtags": ["array", "of", "10-15", "trending", "platform-optimized", "hashtags", "without", "#"],
  "mediaType": "image",
  "mediaDescription": "Detailed description of a clean, visually appealing product image from natural angle with vibrant/brand-appropriate colors showing key features",
  "mediaStyle": "modern" or "minimalist" or "vibrant" or "professional" or "luxury" or "fun" or "aesthetic",
  "tone": "detected tone from input",
  "platform": "Instagram",
  "productCategory": "detected product category"
}}

Requirements:
- Caption must be emotionally compelling and benefit-focused
- Hashtags must be trending and category-specific (tech, beauty, fashion, etc.)
- Image description must specify natural angles, colors, and key features
- Style must match the detected tone and target audience
"""


def build_ad_prompt(description: str) -> str:
    return AD_PROMPT_TEMPLATE.format(description=(description or "").strip())
